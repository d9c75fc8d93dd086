import logging
from restartable.core.interfaces.logging import LoggingPort
from restartable.core.logging_config import coerce_level

class LoggingAdapter(LoggingPort):
    """Concrete logging adapter.

    Delegates to Python's logging. It intentionally does NOT add its own
    handlers so that the application (or `configure_logging`) controls sinks.
    The session id is injected by the handler filter; we simply emit.
    Without `log_level` the logger keeps whatever level the application set.
    """

    def __init__(self, name: str = "restartable", log_level: int | str | None = None):
        self.logger = logging.getLogger(name)
        if log_level is not None:
            self.logger.setLevel(coerce_level(log_level))
        # Allow messages to bubble to root handlers (separate sinks)
        self.logger.propagate = True

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args):
        self.logger.error(msg, *args)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)
