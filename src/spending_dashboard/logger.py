import logging
import logging.config
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColourizedFormatter(logging.Formatter):
    """
    Console formatter that wraps the level name in an ANSI colour.
    """
    RESET = "\x1b[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[90m",     # grey
        logging.INFO: "\x1b[32m",      # green
        logging.WARNING: "\x1b[33m",   # yellow
        logging.ERROR: "\x1b[31m",     # red
        logging.CRITICAL: "\x1b[31;1m",  # bold red
    }

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLORS.get(record.levelno)
        if colour is None:
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{colour}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers see the same record.
            record.levelname = plain


def _build_handlers(log_dir: str | None) -> dict[str, dict]:
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "coloured",
        },
    }
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": os.path.join(log_dir, "app.log"),
            "formatter": "plain",
        }
    return handlers


def get_logging_config() -> dict:
    handlers = _build_handlers(os.getenv("LOG_DIR"))
    handler_names = list(handlers)
    server_logger = {"handlers": handler_names, "level": "INFO", "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "coloured": {"()": "spending_dashboard.logger.ColourizedFormatter", "format": LOG_FORMAT},
            "plain": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": handler_names, "level": os.getenv("LOG_LEVEL", "INFO").upper()},
            **{name: dict(server_logger) for name in ("uvicorn", "uvicorn.error", "uvicorn.access")},
        },
    }


def setup_logging() -> None:
    logging.config.dictConfig(get_logging_config())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
