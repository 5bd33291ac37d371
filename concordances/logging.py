import logging
from pprint import pformat
from typing import Any, Optional, Union

from pydantic import BaseModel

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVEL_ALIASES = {"warn": "WARNING", "fatal": "CRITICAL", "panic": "CRITICAL"}


def parse_log_level(level: Union[str, int]) -> int:
    """Translate a level name such as ``"info"`` or ``"WARN"`` into a logging level."""
    if isinstance(level, int):
        return level
    name = _LEVEL_ALIASES.get(level.strip().lower(), level.strip().upper())
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


class ServiceLogger:
    """A logger wrapper that pretty-prints structured messages and tags them with a transaction id."""

    def __init__(self, logger: logging.Logger, transaction_id: Optional[str] = None):
        self._logger = logger
        self.transaction_id = transaction_id

    def with_transaction_id(self, transaction_id: str) -> "ServiceLogger":
        """Return a logger whose messages are prefixed with ``transaction_id=<tid>``."""
        return ServiceLogger(self._logger, transaction_id)

    def _format_message(self, msg: Any, args: tuple = (), pprint: bool = True) -> str:
        """Format a message, optionally using pprint.

        Pydantic models are rendered with model_dump_json(); other non-string
        objects go through pformat. `args` are interpolated before the
        transaction id is prepended, so the id is never read as a format string.
        """
        if not pprint or isinstance(msg, str):
            text = str(msg) % args if args else str(msg)
        elif isinstance(msg, BaseModel):
            text = msg.model_dump_json(indent=2)
        else:
            text = pformat(msg, width=120, depth=None)
        if self.transaction_id:
            return f"transaction_id={self.transaction_id} {text}"
        return text

    def _log(self, level: int, msg: Any, args: tuple, pprint: bool, kwargs: dict) -> None:
        if not self._logger.isEnabledFor(level):
            return
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, "%s", self._format_message(msg, args, pprint=pprint), **kwargs)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.DEBUG, msg, args, pprint, kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.INFO, msg, args, pprint, kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.WARNING, msg, args, pprint, kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.ERROR, msg, args, pprint, kwargs)

    def critical(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.CRITICAL, msg, args, pprint, kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log at ERROR level with the current exception's traceback."""
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, pprint, kwargs)

    # Delegate other standard logger methods/attributes
    def __getattr__(self, name: str) -> Any:
        return getattr(self._logger, name)


def setup_logging(name: str = "public-concordances-api", level: Union[str, int] = "info") -> ServiceLogger:
    """Set up the named logger once and return a ServiceLogger for it."""
    numeric_level = parse_log_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)
    return ServiceLogger(logger)
