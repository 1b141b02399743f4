"""Application factory bootstrapping runtimes and building application objects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from rackhost.domain import HostContextPort, RackInitializationError, RuntimeInitializationError
from rackhost.runtime import (
    CompiledCodeCache,
    EmbeddedRuntimePort,
    RuntimeConfig,
    RuntimeProvider,
    ScriptRaiseError,
    runtime_bootstrap,
)

from .application import FallbackRackApplication, RackApplication, ScriptedRackApplication
from .interfaces import ApplicationObjectFactory, RackApplicationFactoryPort

_LOGGER = logging.getLogger(__name__)

RACKUP_INIT_PARAMETER = "rackup"
RACK_CONTEXT_GLOBAL = "rack_context"
ADAPTER_BOOTSTRAP_SCRIPT = "require('rack/handler/servlet')"
RACK_BOOT_FEATURE = "rack/boot/rack"
ERROR_APPLICATION_RACKUP = "run(ErrorsApp())"
ERROR_APPLICATION_WARNING = "Warning: error application could not be initialized"


class DefaultRackApplicationFactory(RackApplicationFactoryPort):
    """Factory producing one independent runtime-backed application per call."""

    def __init__(
        self,
        runtime_provider: RuntimeProvider = runtime_bootstrap,
        load_paths: Iterable[str | Path] = (),
    ):
        """Initialize factory collaborators.

        Args:
            runtime_provider: Callable allocating one fresh runtime per config.
            load_paths: Extra script directories searched before bundled resources.

        Raises:
            ValueError: Raised when runtime_provider is None.
        """

        if runtime_provider is None:
            raise ValueError("runtime_provider must not be None")

        self._runtime_provider = runtime_provider
        self._load_paths = tuple(Path(load_path) for load_path in load_paths)
        self._rackup_script: str | None = None
        self._context: HostContextPort | None = None
        self._code_cache: CompiledCodeCache | None = None
        self._error_application: RackApplication | None = None

    @property
    def factory_rackup_script(self) -> str | None:
        """Return the descriptor read at init, or None."""

        return self._rackup_script

    @property
    def factory_code_cache(self) -> CompiledCodeCache | None:
        """Return the compiled-code cache shared by this factory's runtimes."""

        return self._code_cache

    def factory_init(self, context: HostContextPort) -> None:
        """Store host context, read the descriptor and build the error application.

        Error application failures degrade to a synthetic fallback and are never
        raised from here.

        Args:
            context: Host serving environment context.

        Returns:
            None: Initialization has no return value.

        Raises:
            ValueError: Raised when context is None.
        """

        if context is None:
            raise ValueError("context must not be None")

        self._context = context
        self._rackup_script = context.context_get_init_parameter(RACKUP_INIT_PARAMETER)
        self._code_cache = CompiledCodeCache()
        if self._error_application is None:
            self._error_application = self.factory_new_error_application()

    def factory_new_application(self) -> ScriptedRackApplication:
        """Bootstrap a runtime and bind it to the primary application strategy.

        Returns:
            ScriptedRackApplication: Uninitialized application.

        Raises:
            RackInitializationError: Raised when runtime bootstrap fails.
        """

        return self._factory_create_application(self.factory_create_application_object)

    def factory_get_application(self) -> ScriptedRackApplication:
        """Create and initialize one primary application.

        Returns:
            ScriptedRackApplication: Initialized application.

        Raises:
            RackInitializationError: Raised when bootstrap or object construction fails.
        """

        application = self.factory_new_application()
        try:
            application.application_init()
        except BaseException:
            application.application_destroy()
            raise
        return application

    def factory_finished_with_application(self, application: RackApplication) -> None:
        """Destroy an application produced by this factory.

        Args:
            application: Initialized or uninitialized application.

        Returns:
            None: Release has no return value.
        """

        application.application_destroy()

    def factory_get_error_application(self) -> RackApplication | None:
        """Return the error application cached at init.

        Returns:
            RackApplication | None: Error application; None before init or after destroy.
        """

        return self._error_application

    def factory_set_error_application(self, application: RackApplication | None) -> None:
        """Replace the cached error application.

        An application set before `factory_init` is kept by init.

        Args:
            application: Error application to cache.

        Returns:
            None: Setter has no return value.
        """

        self._error_application = application

    def factory_destroy(self) -> None:
        """Destroy the error application and clear the reference.

        Returns:
            None: Teardown has no return value.
        """

        if self._error_application is not None:
            self._error_application.application_destroy()
        self._error_application = None

    def factory_new_runtime(self) -> EmbeddedRuntimePort:
        """Allocate a runtime with the shared cache, host context and adapter module.

        Returns:
            EmbeddedRuntimePort: New runtime owned by the caller.

        Raises:
            RuntimeInitializationError: Raised when the runtime cannot start or the adapter bootstrap script raises.
        """

        if self._code_cache is None:
            raise RuntimeInitializationError("factory_init must be called before creating runtimes")

        runtime_config = RuntimeConfig(code_cache=self._code_cache, load_paths=self._load_paths)
        try:
            runtime = self._runtime_provider(runtime_config)
        except RuntimeInitializationError:
            raise
        except Exception as error:
            raise RuntimeInitializationError(str(error)) from error

        try:
            runtime.runtime_bind_global(RACK_CONTEXT_GLOBAL, self._context)
            runtime.runtime_evaluate(ADAPTER_BOOTSTRAP_SCRIPT)
        except ScriptRaiseError as error:
            runtime.runtime_terminate()
            raise RuntimeInitializationError(str(error)) from error
        except BaseException:
            runtime.runtime_terminate()
            raise
        return runtime

    def factory_create_application_object(self, runtime: EmbeddedRuntimePort) -> Any:
        """Build the primary application object from the configured descriptor.

        Args:
            runtime: Runtime the object is built in.

        Returns:
            Any: Runtime-resident application object.

        Raises:
            ScriptRaiseError: Raised when the descriptor raises.
        """

        return self.factory_create_servlet_wrapper(runtime, self._rackup_script)

    def factory_create_error_application_object(self, runtime: EmbeddedRuntimePort) -> Any:
        """Build the default errors pipeline application object.

        Args:
            runtime: Runtime the object is built in.

        Returns:
            Any: Runtime-resident error application object.

        Raises:
            ScriptRaiseError: Raised when the errors pipeline cannot be built.
        """

        return self.factory_create_servlet_wrapper(runtime, ERROR_APPLICATION_RACKUP)

    def factory_create_servlet_wrapper(self, runtime: EmbeddedRuntimePort, rackup: str | None) -> Any:
        """Evaluate a descriptor into a pipeline wrapped by the request adapter.

        Args:
            runtime: Runtime the object is built in.
            rackup: Descriptor script source.

        Returns:
            Any: Adapter object exposing `call(request)`.

        Raises:
            ScriptRaiseError: Raised when loading or evaluating the descriptor raises.
        """

        return runtime.runtime_evaluate(
            f"load({RACK_BOOT_FEATURE!r})\n"
            f"ServletHandler(Builder.parse({rackup or ''!r}).to_app())\n",
            filename="<rackup>",
        )

    def factory_new_error_application(self) -> RackApplication:
        """Build and initialize the error application, degrading on any failure.

        Returns:
            RackApplication: Scripted error application, or a fallback carrying the failure.
        """

        application: ScriptedRackApplication | None = None
        try:
            application = self._factory_create_application(self.factory_create_error_application_object)
            application.application_init()
            return application
        except Exception as error:  # pylint: disable=broad-exception-caught
            if self._context is not None:
                self._context.context_log(ERROR_APPLICATION_WARNING, error, level=logging.WARNING)
            else:
                _LOGGER.warning(ERROR_APPLICATION_WARNING, exc_info=error)
            if application is not None:
                self._factory_discard_application(application)
            return FallbackRackApplication(self._context, error)

    def factory_verify(self, runtime: EmbeddedRuntimePort, script: str) -> str:
        """Evaluate a diagnostic script and return its result as text.

        Args:
            runtime: Runtime to evaluate in.
            script: Script source text.

        Returns:
            str: `str()` of the result, or the error message when evaluation fails.
        """

        try:
            return str(runtime.runtime_evaluate(script, filename="<verify>"))
        except Exception as error:  # pylint: disable=broad-exception-caught
            return str(error)

    def _factory_create_application(self, object_factory: ApplicationObjectFactory) -> ScriptedRackApplication:
        try:
            runtime = self.factory_new_runtime()
        except (RuntimeInitializationError, ScriptRaiseError) as error:
            raise RackInitializationError.from_error(error) from error
        return ScriptedRackApplication(runtime, object_factory)

    def _factory_discard_application(self, application: ScriptedRackApplication) -> None:
        try:
            application.application_destroy()
        except Exception:  # pylint: disable=broad-exception-caught
            _LOGGER.debug("failed to tear down partially built application", exc_info=True)
