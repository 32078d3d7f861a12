"""
Provider adapters: raw upstream JSON -> canonical Post.

Each adapter decodes the raw payload into an explicit provider record first (optional
fields are Optional, required ones raise PostDecodeError), then maps that record to a
`Post`. Translation is applied later by the pipeline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Protocol

from core.media import partition_image_embed, partition_typed_media
from core.models.post import Post, Provider

logger = logging.getLogger(__name__)

UNKNOWN_LANGUAGE = "und"


class PostDecodeError(Exception):
    """Raised when an upstream payload lacks a required field or has the wrong shape."""

    def __init__(self, provider: Provider, detail: str):
        self.provider = provider
        self.detail = detail
        super().__init__(f"{provider.value}: {detail}")


# ---------------- Field helpers ----------------


def _required_str(provider: Provider, data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise PostDecodeError(provider, f"missing or non-string field '{key}'")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _required_mapping(provider: Provider, data: Any, key: str) -> Mapping[str, Any]:
    value = data.get(key) if isinstance(data, Mapping) else None
    if not isinstance(value, Mapping):
        raise PostDecodeError(provider, f"missing or non-object field '{key}'")
    return value


def _count(data: Mapping[str, Any], key: str) -> int:
    """Engagement counters: absent, null or negative values all read as 0."""
    value = data.get(key)
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


# ---------------- Twitter ----------------


@dataclass(frozen=True)
class TwitterMedia:
    type: str
    url: str


@dataclass(frozen=True)
class TwitterStatus:
    """Shape of a scrape API status (vxtwitter style)."""

    text: str
    user_screen_name: str
    tweet_url: str
    user_name: Optional[str] = None
    user_profile_image_url: Optional[str] = None
    lang: Optional[str] = None
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    media_extended: List[TwitterMedia] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "TwitterStatus":
        provider = Provider.TWITTER
        if not isinstance(data, Mapping):
            raise PostDecodeError(provider, "payload is not an object")

        media: List[TwitterMedia] = []
        raw_media = data.get("media_extended")
        if isinstance(raw_media, list):
            for item in raw_media:
                if isinstance(item, Mapping) and isinstance(item.get("url"), str):
                    media.append(TwitterMedia(type=str(item.get("type", "")), url=item["url"]))

        return cls(
            text=_required_str(provider, data, "text"),
            user_screen_name=_required_str(provider, data, "user_screen_name"),
            tweet_url=_required_str(provider, data, "tweetURL"),
            user_name=_optional_str(data, "user_name"),
            user_profile_image_url=_optional_str(data, "user_profile_image_url"),
            lang=_optional_str(data, "lang"),
            likes=_count(data, "likes"),
            retweets=_count(data, "retweets"),
            replies=_count(data, "replies"),
            media_extended=media,
        )


# ---------------- Bluesky ----------------


@dataclass(frozen=True)
class BlueskyAuthor:
    handle: str
    display_name: Optional[str] = None
    avatar: Optional[str] = None


@dataclass(frozen=True)
class BlueskyEmbed:
    """An embed view; only image embeds carry `images` (None when the key is absent)."""

    type: Optional[str] = None
    images: Optional[List[str]] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["BlueskyEmbed"]:
        if not isinstance(data, Mapping):
            return None
        images: Optional[List[str]] = None
        if "images" in data and isinstance(data["images"], list):
            images = [
                img["fullsize"]
                for img in data["images"]
                if isinstance(img, Mapping) and isinstance(img.get("fullsize"), str)
            ]
        return cls(type=_optional_str(data, "$type"), images=images)


@dataclass(frozen=True)
class BlueskyThreadPost:
    """Shape of `thread.post` in an app.bsky.feed.getPostThread response."""

    uri: str
    author: BlueskyAuthor
    text: str
    langs: List[str] = field(default_factory=list)
    like_count: int = 0
    repost_count: int = 0
    quote_count: int = 0
    reply_count: int = 0
    embed: Optional[BlueskyEmbed] = None

    UNAVAILABLE_TYPES: ClassVar[tuple] = (
        "app.bsky.feed.defs#notFoundPost",
        "app.bsky.feed.defs#blockedPost",
    )

    @property
    def rkey(self) -> str:
        return self.uri.rstrip("/").rsplit("/", 1)[-1]

    @classmethod
    def from_json(cls, data: Any) -> "BlueskyThreadPost":
        provider = Provider.BLUESKY
        thread = _required_mapping(provider, data, "thread")
        if thread.get("$type") in cls.UNAVAILABLE_TYPES:
            raise PostDecodeError(provider, f"thread node is {thread.get('$type')}")

        post = _required_mapping(provider, thread, "post")
        author = _required_mapping(provider, post, "author")
        record = _required_mapping(provider, post, "record")

        uri = _required_str(provider, post, "uri")
        if not uri.startswith("at://"):
            raise PostDecodeError(provider, f"not an at:// uri: {uri}")

        langs = record.get("langs")
        return cls(
            uri=uri,
            author=BlueskyAuthor(
                handle=_required_str(provider, author, "handle"),
                display_name=_optional_str(author, "displayName"),
                avatar=_optional_str(author, "avatar"),
            ),
            text=_required_str(provider, record, "text"),
            langs=[lang for lang in langs if isinstance(lang, str)] if isinstance(langs, list) else [],
            like_count=_count(post, "likeCount"),
            repost_count=_count(post, "repostCount"),
            quote_count=_count(post, "quoteCount"),
            reply_count=_count(post, "replyCount"),
            embed=BlueskyEmbed.from_json(post.get("embed")),
        )


# ---------------- Adapters ----------------


class ProviderAdapter(Protocol):
    """
    All provider adapters implement this.

    MUST:
      - Decode the raw payload, raising PostDecodeError on a malformed shape
      - Return an untranslated Post whose media lists are disjoint
    """

    provider: Provider

    def normalize(self, raw: Any) -> Post: ...


class TwitterAdapter:
    provider = Provider.TWITTER

    def normalize(self, raw: Any) -> Post:
        status = TwitterStatus.from_json(raw)
        return Post(
            provider=self.provider,
            author_handle=status.user_screen_name,
            author_display_name=status.user_name or status.user_screen_name,
            author_icon_url=status.user_profile_image_url,
            post_url=status.tweet_url,
            text=status.text,
            language=status.lang or UNKNOWN_LANGUAGE,
            likes=status.likes,
            reposts=status.retweets,
            replies=status.replies,
            media=partition_typed_media(status.media_extended),
        )


class BlueskyAdapter:
    provider = Provider.BLUESKY

    def normalize(self, raw: Any) -> Post:
        post = BlueskyThreadPost.from_json(raw)
        handle = post.author.handle

        image_urls = post.embed.images if post.embed is not None else None
        if image_urls:
            logger.debug("Bluesky images: %s", image_urls)

        return Post(
            provider=self.provider,
            author_handle=handle,
            author_display_name=post.author.display_name or handle,
            author_icon_url=post.author.avatar,
            post_url=f"https://bsky.app/profile/{handle}/post/{post.rkey}",
            text=post.text,
            language=post.langs[0] if post.langs else UNKNOWN_LANGUAGE,
            likes=post.like_count,
            # Quotes count as a repost variant for display.
            reposts=post.repost_count + post.quote_count,
            replies=post.reply_count,
            media=partition_image_embed(image_urls),
        )


ADAPTERS: Dict[Provider, ProviderAdapter] = {
    Provider.TWITTER: TwitterAdapter(),
    Provider.BLUESKY: BlueskyAdapter(),
}


def normalize(provider: Provider, raw: Any) -> Post:
    return ADAPTERS[provider].normalize(raw)
