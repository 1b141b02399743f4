"""Host context implementation backed by init parameters and stdlib logging."""

from __future__ import annotations

import logging
from typing import Mapping

from rackhost.domain import HostContextPort

CONTEXT_LOGGER_NAME = "rackhost.context"


class LoggingHostContext(HostContextPort):
    """Host context serving fixed init parameters and logging to `rackhost.context`."""

    def __init__(
        self,
        init_parameters: Mapping[str, str | None],
        logger: logging.Logger | None = None,
    ):
        """Initialize host context.

        Args:
            init_parameters: Deployment init parameters.
            logger: Optional logger override.

        Raises:
            ValueError: Raised when init_parameters is None.
        """

        if init_parameters is None:
            raise ValueError("init_parameters must not be None")
        self._init_parameters = dict(init_parameters)
        self._logger = logger or logging.getLogger(CONTEXT_LOGGER_NAME)

    def context_get_init_parameter(self, name: str) -> str | None:
        """Return one init parameter value.

        Args:
            name: Init parameter name.

        Returns:
            str | None: Parameter value, or None when absent.
        """

        return self._init_parameters.get(name)

    def context_log(self, message: str, error: BaseException | None = None, level: int | None = None) -> None:
        """Log a message, attaching the error traceback when one is given.

        Entries default to INFO without an error and ERROR with one.

        Args:
            message: Log message.
            error: Optional error attached to the entry.
            level: Optional stdlib logging level overriding the default.

        Returns:
            None: Logging has no return value.
        """

        if error is None:
            self._logger.log(logging.INFO if level is None else level, message)
            return
        self._logger.log(logging.ERROR if level is None else level, "%s: %s", message, error, exc_info=error)
