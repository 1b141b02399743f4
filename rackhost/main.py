"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the HTTP host, or
runs one of the diagnostic commands against the application factory.
"""

import argparse

import uvicorn

from rackhost.bootstrap import bootstrap_create_application, bootstrap_create_application_factory
from rackhost.config import AppSettings, config_load_settings
from rackhost.domain import RackInitializationError
from rackhost.logging import logging_configure


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when `check` fails.
    """

    argument_parser = argparse.ArgumentParser(description="Rack host runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "check", "eval"),
        help="Runtime command: `api` starts server, `check` builds the application once, "
        "`eval` evaluates a script in a fresh runtime",
        type=str,
    )
    argument_parser.add_argument(
        "script",
        nargs="?",
        default=None,
        help="Script source for `eval`",
        type=str,
    )
    argument_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    logging_configure(settings.log_level, debug_mode=parsed_arguments.debug)

    if parsed_arguments.command == "check":
        raise SystemExit(main_check_application(settings))

    if parsed_arguments.command == "eval":
        if parsed_arguments.script is None:
            argument_parser.error("`eval` requires a script argument")
        print(main_evaluate_script(settings, parsed_arguments.script))
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_check_application(settings: AppSettings) -> int:
    """Build and release one primary application.

    Args:
        settings: Validated application settings.

    Returns:
        int: Process exit code, 0 on success and 1 on failure.
    """

    application_factory, _ = bootstrap_create_application_factory(settings)
    try:
        application = application_factory.factory_get_application()
    except RackInitializationError as error:
        print("APPLICATION_INIT_FAILED:", error)
        application_factory.factory_destroy()
        return 1

    application_factory.factory_finished_with_application(application)
    application_factory.factory_destroy()
    print("APPLICATION_OK")
    return 0


def main_evaluate_script(settings: AppSettings, script: str) -> str:
    """Evaluate a script in a fresh bootstrapped runtime.

    Args:
        settings: Validated application settings.
        script: Script source text.

    Returns:
        str: Result text, or the error message when evaluation fails.

    Raises:
        RackInitializationError: Raised when the runtime cannot be bootstrapped.
    """

    application_factory, _ = bootstrap_create_application_factory(settings)
    application = application_factory.factory_new_application()
    try:
        return application_factory.factory_verify(application.application_get_runtime(), script)
    finally:
        application_factory.factory_finished_with_application(application)
        application_factory.factory_destroy()


if __name__ == "__main__":
    main()
