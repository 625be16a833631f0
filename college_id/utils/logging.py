import logging
import sys
import json
from contextvars import ContextVar
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from college_id.config.settings import settings

request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    "log_dir": "logs",
    "filename": "college-id.log",
    "level": "info",
    "rotation": "20 MB",
    "retention": "14 days",
    "console_format": (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | "
        "{name}:{function}:{line} - {message}"
    ),
    "file_format": (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | "
        "{name}:{function}:{line} - {message}"
    ),
    "use_json_logs": False,
}


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_context.get()


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_context.set(request_id)


def _inject_request_id(record) -> None:
    # Loggers bound at import time still pick up the live request id
    request_id = get_request_id()
    if request_id:
        record["extra"]["request_id"] = request_id


class InterceptHandler(logging.Handler):
    """Route records from the standard logging module into loguru."""

    loglevel_mapping = {
        50: "CRITICAL",
        40: "ERROR",
        30: "WARNING",
        20: "INFO",
        10: "DEBUG",
        0: "NOTSET",
    }

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except (AttributeError, ValueError):
            level = self.loglevel_mapping.get(record.levelno, record.levelno)

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        log = logger.bind(request_id=get_request_id() or "app")
        log.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class CustomizeLogger:
    @classmethod
    def make_logger(cls, config_path: Path, environment: str = "logger", level: Optional[str] = None):
        logging_config = {**DEFAULT_LOGGING_CONFIG}
        config = cls.load_logging_config(config_path)
        logging_config.update(config.get(environment, config.get("logger", {})))

        return cls.customize_logging(
            log_dir=logging_config["log_dir"],
            filename=f"{date.today().strftime('%Y-%m-%d')}-{logging_config['filename']}",
            level=level or logging_config["level"],
            rotation=logging_config["rotation"],
            retention=logging_config["retention"],
            console_format=logging_config["console_format"],
            file_format=logging_config["file_format"],
            use_json_logs=logging_config.get("use_json_logs", False),
        )

    @classmethod
    def customize_logging(
        cls,
        log_dir: str,
        filename: str,
        level: str,
        rotation: str,
        retention: str,
        console_format: str,
        file_format: str,
        use_json_logs: bool = False,
    ):
        logger.remove()
        logger.configure(extra={"request_id": "app"}, patcher=_inject_request_id)

        # Console logger with colors
        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            level=level.upper(),
            format=console_format,
            colorize=True,
        )

        # File logger without colors
        if use_json_logs and file_format == "json":
            logger.add(
                str(Path(log_dir) / filename),
                rotation=rotation,
                retention=retention,
                enqueue=True,
                backtrace=True,
                level=level.upper(),
                serialize=True,
                colorize=False,
            )
        else:
            logger.add(
                str(Path(log_dir) / filename),
                rotation=rotation,
                retention=retention,
                enqueue=True,
                backtrace=True,
                level=level.upper(),
                format=file_format,
                colorize=False,
            )

        cls._setup_intercept_handlers()

        return logger

    @staticmethod
    def _setup_intercept_handlers():
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

        for log_name in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "pymongo"]:
            _logger = logging.getLogger(log_name)
            _logger.handlers = [InterceptHandler()]
            _logger.propagate = False

        # The driver is chatty at DEBUG (heartbeats, pool events)
        logging.getLogger("pymongo").setLevel(logging.WARNING)

    @staticmethod
    def load_logging_config(config_path: Path) -> Dict[str, Any]:
        """Read the JSON config, trying the working directory then the project root."""
        candidates = [config_path, Path(__file__).resolve().parents[2] / config_path]
        for candidate in candidates:
            if candidate.is_file():
                with open(candidate) as config_file:
                    return json.load(config_file)
        return {}


environment = "production" if settings.ENVIRONMENT == "production" else "logger"
custom_logger = CustomizeLogger.make_logger(
    Path(settings.LOG_CONFIG_PATH), environment, level=settings.LOG_LEVEL
)


def get_logger():
    """Get the custom logger instance with request ID binding."""
    return custom_logger.bind(request_id=get_request_id() or "app")
