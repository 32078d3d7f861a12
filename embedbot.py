import argparse
import logging
import sys

import utils.others as otherutils
from core.fetcher import PostFetcher
from core.pipeline import PostPipeline
from core.translate import DEFAULT_TARGET_LANG, Translator
from definitions import DEFAULT_CONFIG_FILE
from socials.discord_client import EmbedBotClient
from socials.dispatcher import Dispatcher
from utils.config import (
    DEFAULT_BLUESKY_API_BASE,
    DEFAULT_SCRAPE_API_BASE,
    ConfigError,
    load_config,
    max_upload_bytes,
    provider_setting,
    request_timeout,
    require,
)
from utils.http import HttpClient
from utils.sessions import SessionFactory

logger = logging.getLogger("embedbot")


def build_services(config: dict):
    """
    Construct the long-lived service handles once, at process start.

    Returns:
        tuple: (PostPipeline, Dispatcher, SessionFactory)
    """
    script_cfg = config.get("script", {}) or {}
    sessions = SessionFactory(user_agent=script_cfg.get("user_agent"))
    http = HttpClient(sessions, timeout=request_timeout(config))

    fetcher = PostFetcher(
        http,
        scrape_api_base=provider_setting(config, "twitter", "scrape_api_base", DEFAULT_SCRAPE_API_BASE),
        bluesky_api_base=provider_setting(config, "bluesky", "api_base", DEFAULT_BLUESKY_API_BASE),
    )

    translator = None
    deepl_cfg = config.get("deepl", {}) or {}
    if deepl_cfg.get("auth_key"):
        translator = Translator.from_auth_key(
            deepl_cfg["auth_key"],
            target_lang=deepl_cfg.get("target_lang", DEFAULT_TARGET_LANG),
        )
    else:
        logger.warning("No DeepL auth key configured; posts will not be translated.")

    pipeline = PostPipeline(fetcher, translator)
    dispatcher = Dispatcher(http, max_upload_bytes=max_upload_bytes(config))
    return pipeline, dispatcher, sessions


def main():
    """
    Entry point for the embed bot.

    Parses command-line arguments, loads configuration, sets up logging, builds the
    shared service handles and runs the Discord client until it is stopped.
    """

    # fmt: off
    parser = argparse.ArgumentParser(description="Republish Twitter/X and Bluesky links as rich Discord previews.")
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_FILE), help="Path to the configuration file (default: config/config.yaml).")
    parser.add_argument("--console", action="store_true", help="Write logs to console instead of a file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()
    # fmt: on

    try:
        config = load_config(args.config)
        token = require(config, "discord", "token")
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    otherutils.setup_logging(config, console=args.console, debug=args.debug)
    otherutils.log_startup_info(args, config)

    pipeline, dispatcher, sessions = build_services(config)
    client = EmbedBotClient(pipeline, dispatcher)

    try:
        # log_handler=None keeps discord.py from replacing our logging setup
        client.run(token, log_handler=None)
    finally:
        sessions.close()
        logger.info("Embed bot stopped.")


if __name__ == "__main__":
    main()
