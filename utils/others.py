import logging
import os
from datetime import datetime

from definitions import LOGS_DIR

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[38;5;244m",  # gray
        "INFO": "\033[38;5;120m",  # soft mint green
        "WARNING": "\033[38;5;221m",  # warm yellow
        "ERROR": "\033[38;5;196m",  # bright red
        "CRITICAL": "\033[1;38;5;196;48;5;232m",  # bold bright red on dark bg
    }
    RESET = "\033[0m"

    def format(self, record):
        level = record.levelname
        if level in self.COLORS:
            record.levelname = f"{self.COLORS[level]}{level}{self.RESET}"
        return super().format(record)


def setup_logging(config, console=False, debug=False):
    """
    Sets up the logging configuration based on provided settings.

    Args:
        config (dict): The configuration dictionary containing script settings.
        console (bool): If True, log to console instead of a file.
        debug (bool): If True, set the logging level to DEBUG; otherwise, INFO.
    """
    script_cfg = config.get("script", {}) or {}
    log_file_name_base = script_cfg.get("log_file_name", "embedbot")
    log_file_name_time = datetime.now().strftime("%Y%m%d%H%M%S")
    log_file_name_full = f"{log_file_name_base}-{log_file_name_time}.log"
    log_file_path = os.path.join(LOGS_DIR, log_file_name_full)

    logger_level = logging.DEBUG if debug else logging.INFO

    log_format = "%(asctime)s [%(name)s.%(funcName)s:%(lineno)d] %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    handlers = []

    if console:
        handler = logging.StreamHandler()
        handler.setFormatter(ColoredFormatter(log_format, datefmt=date_format))
        handlers.append(handler)
    else:
        os.makedirs(LOGS_DIR, exist_ok=True)
        handler = logging.FileHandler(log_file_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(log_format, date_format))
        handlers.append(handler)

    logging.basicConfig(
        level=logger_level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
    )

    # discord.py is chatty at DEBUG (gateway payloads)
    logging.getLogger("discord").setLevel(logging.INFO)

    logger.info("Logging initialized.")
    if console:
        logger.info("Logging to console.")
    else:
        logger.info("Logging to file: %s", log_file_path)


def log_startup_info(args, config):
    """
    Log startup information, including arguments and configuration details.

    Secrets are never logged, only whether they are present.

    Args:
        args (Namespace): The parsed arguments.
        config (dict): The configuration dictionary.
    """
    logger.info("#" * 80)
    logger.info("New instance of the Embed Bot started.")
    logger.info("TIME: %s", datetime.now())
    logger.info("Startup Parameters:")

    for arg, value in vars(args).items():
        logger.info("  ARG - %s: %s", arg, value)

    logger.info("Provider Configurations:")
    providers_cfg = config.get("providers", {}) or {}
    for provider, settings in providers_cfg.items():
        logger.info("  PROVIDER - %s: %s", provider, settings)

    deepl_cfg = config.get("deepl", {}) or {}
    logger.info("  TRANSLATION - DeepL key present: %s", bool(deepl_cfg.get("auth_key")))
    logger.info("#" * 80)


def filename_from_url(url: str, default: str = "media") -> str:
    """
    Derive an upload filename from a media URL.

    Query strings and fragments are dropped, e.g.
    'https://video.twimg.com/ext_tw_video/1/pu/vid/720x1280/abc.mp4?tag=12' -> 'abc.mp4'.
    """
    path = url.split("?", 1)[0].split("#", 1)[0].rstrip("/")
    name = path.rsplit("/", 1)[-1]
    return name or default
