import logging
from typing import Dict, Optional

from core.fetcher import PostFetcher
from core.links import LinkMatch
from core.models.post import Post, Provider
from core.normalize import ADAPTERS, PostDecodeError, ProviderAdapter
from core.translate import Translator

logger = logging.getLogger(__name__)


class PostPipeline:
    """
    Runs fetch -> normalize -> (conditional) translate for one matched link.

    The pipeline holds only long-lived, read-only service handles, so a single
    instance is shared by every concurrently running message task.

    Returns None whenever the post is unavailable (fetch returned nothing, or the
    payload could not be decoded); callers abort silently in that case.
    """

    def __init__(
        self,
        fetcher: PostFetcher,
        translator: Optional[Translator],
        adapters: Optional[Dict[Provider, ProviderAdapter]] = None,
    ):
        self.fetcher = fetcher
        self.translator = translator
        self.adapters = adapters or ADAPTERS

    async def build_post(self, match: LinkMatch) -> Optional[Post]:
        raw = await self.fetcher.fetch(match.provider, match.post_id)
        if raw is None:
            logger.info("No %s data for %s; skipping message.", match.provider.value, match.post_id)
            return None

        try:
            post = self.adapters[match.provider].normalize(raw)
        except PostDecodeError as e:
            logger.warning("Unexpected upstream shape for %s (%s); skipping message.", match.post_id, e)
            return None

        logger.info(
            "Normalized %s by @%s: lang=%s images=%d videos=%d gifs=%d",
            match.provider.value,
            post.author_handle,
            post.language,
            len(post.images),
            len(post.videos),
            len(post.gifs),
        )
        return await self.translate_if_needed(post)

    async def translate_if_needed(self, post: Post) -> Post:
        if post.is_english:
            return post
        if not post.text.strip():
            logger.debug("No text to translate (media-only post).")
            return post
        if self.translator is None:
            logger.debug("No translator configured; leaving %s text as-is.", post.language)
            return post

        result = await self.translator.translate(post.text, post.language)
        if not result.ok:
            return post

        # Posts with no upstream language can still turn out to be English.
        if (result.detected_source_lang or "").upper() == "EN":
            logger.debug("DeepL detected English source; keeping original text.")
            return post

        return post.with_translation(result.text)
