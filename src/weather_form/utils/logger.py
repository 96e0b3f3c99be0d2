import inspect
import logging
import os

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "weather_form"

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _caller_location() -> str:
    # two frames up: past this helper and the Logger method that called it
    frame = inspect.currentframe()
    caller = frame.f_back.f_back if frame and frame.f_back else None
    if caller is None:
        return "unknown:0"
    return f"{caller.f_code.co_filename}:{caller.f_lineno}"


class Logger(logging.LoggerAdapter):
    """JSON logger shared by the whole package.

    Keyword arguments passed to the log methods end up as structured fields
    of the emitted record, e.g. ``logger.info("Lookup issued", city="paris")``.
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

        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = _LOG_LEVELS.get(level_name, logging.INFO)

        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        base_logger = logging.getLogger(LOGGER_NAME)
        base_logger.setLevel(log_level)
        base_logger.addHandler(handler)

        super().__init__(base_logger)
        Logger._initialized = True

    def error(self, msg: str, *args: tuple, **kwargs: dict) -> None:
        """Log an error with the caller's file and line attached."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self, msg: str, *args: tuple, exc_info: bool = True, **kwargs: dict
    ) -> None:
        """Log an error with traceback and the caller's file and line attached."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # everything that is not a logging keyword becomes a JSON field
        result_kwargs = {}
        for reserved in ("exc_info", "stack_info", "stacklevel"):
            value = kwargs.pop(reserved, None)
            if value is not None:
                result_kwargs[reserved] = value
        if kwargs:
            result_kwargs["extra"] = kwargs
        return msg, result_kwargs


logger = Logger()
logger.debug(
    f"Logging level set to {logging.getLevelName(logger.logger.getEffectiveLevel())}"
)
