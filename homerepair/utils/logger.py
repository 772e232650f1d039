import inspect
import logging
import os

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "homerepair"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _caller_location() -> str:
    # two frames up: the Logger method, then its caller
    frame = inspect.currentframe()
    caller = frame.f_back.f_back if frame and frame.f_back else None
    if caller is None:
        return "unknown:0"
    return f"{caller.f_code.co_filename}:{caller.f_lineno}"


class Logger(logging.LoggerAdapter):
    """JSON logger shared by every module.

    Keyword arguments passed to the log methods are emitted as JSON fields,
    e.g. ``logger.info("Job created", job_id=job.id)``.
    """

    _instance = None
    _initialized = False

    def __new__(cls) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if Logger._initialized:
            return

        log_level = _LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

        super().__init__(logger)
        Logger._initialized = True

    def error(self, msg: str, *args: tuple, **kwargs: dict) -> None:
        """Log at ERROR level, tagging the record with the caller's file and line."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self, msg: str, *args: tuple, exc_info: bool = True, **kwargs: dict
    ) -> None:
        """Log at ERROR level with the active traceback attached."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # Everything that is not a logging keyword goes into 'extra',
        # which pythonjsonlogger renders as top-level fields.
        reserved = {}
        for key in ("exc_info", "stack_info", "stacklevel"):
            value = kwargs.pop(key, None)
            if value is not None:
                reserved[key] = value

        if kwargs:
            reserved["extra"] = kwargs
        return msg, reserved


logger = Logger()
logger.debug(
    f"Logging level set to {logging.getLevelName(logger.logger.getEffectiveLevel())}"
)
