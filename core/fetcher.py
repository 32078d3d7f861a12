import asyncio
import logging
from typing import Any, Optional

from core.models.post import Provider
from utils.config import DEFAULT_BLUESKY_API_BASE, DEFAULT_SCRAPE_API_BASE
from utils.http import HttpClient

logger = logging.getLogger(__name__)

BLUESKY_THREAD_ENDPOINT = "/xrpc/app.bsky.feed.getPostThread"


class PostFetcher:
    """
    Retrieves the raw upstream JSON for a linked post.

    Twitter posts come from a scrape API (`GET {scrape_api_base}/{status_id}`); Bluesky
    posts come from the public AppView's getPostThread, where the post of interest is
    the top-level `thread.post`. Any unavailable condition (HTTP >= 400, network error,
    timeout, undecodable body) is returned as None and never raised.
    """

    def __init__(
        self,
        http: HttpClient,
        scrape_api_base: str = DEFAULT_SCRAPE_API_BASE,
        bluesky_api_base: str = DEFAULT_BLUESKY_API_BASE,
    ):
        self.http = http
        self.scrape_api_base = scrape_api_base.rstrip("/")
        self.bluesky_api_base = bluesky_api_base.rstrip("/")

    def fetch_sync(self, provider: Provider, post_id: str) -> Optional[Any]:
        if provider is Provider.TWITTER:
            url = f"{self.scrape_api_base}/{post_id}"
            logger.info("Fetching tweet %s from %s", post_id, url)
            return self.http.get_json(url)

        if provider is Provider.BLUESKY:
            url = f"{self.bluesky_api_base}{BLUESKY_THREAD_ENDPOINT}"
            logger.info("Fetching Bluesky thread for %s", post_id)
            return self.http.get_json(url, params={"uri": post_id, "depth": 0, "parentHeight": 0})

        raise ValueError(f"Unsupported provider: {provider}")

    async def fetch(self, provider: Provider, post_id: str) -> Optional[Any]:
        return await asyncio.to_thread(self.fetch_sync, provider, post_id)
