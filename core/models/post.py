from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List


class Provider(str, Enum):
    """Upstream platforms a linked post can come from."""

    TWITTER = "twitter"
    BLUESKY = "bluesky"

    @property
    def post_noun(self) -> str:
        return "Tweet" if self is Provider.TWITTER else "Post"

    def profile_url(self, handle: str) -> str:
        if self is Provider.TWITTER:
            return f"https://twitter.com/{handle}"
        return f"https://bsky.app/profile/{handle}"


@dataclass(frozen=True)
class MediaPartition:
    """
    The three disjoint, order-preserving media URL lists of a post.

    Every classified media item lands in exactly one list. Items whose type is not
    recognized are not represented at all.
    """

    images: List[str] = field(default_factory=list)
    videos: List[str] = field(default_factory=list)
    gifs: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "MediaPartition":
        return cls()

    def __len__(self) -> int:
        return len(self.images) + len(self.videos) + len(self.gifs)


@dataclass
class Post:
    """
    Canonical, provider-agnostic post built fresh for every incoming message.

    Attributes:
        provider (Provider): Which platform the post was fetched from.
        author_handle (str): The author's handle (without the leading '@').
        author_display_name (str): The author's display name (may equal the handle).
        author_icon_url (str | None): Avatar URL of the author, if the upstream returned one.
        post_url (str): Canonical link back to the source post.
        text (str): Post body. Replaced by the English text when `translated` is True.
        language (str): Source language code as reported upstream ("und" when unknown).
        translated (bool): True only after a successful translation of a non-English post.
        likes / reposts / replies (int): Non-negative engagement counts.
        media (MediaPartition): Images, videos and gifs attached to the post.
    """

    provider: Provider
    author_handle: str
    author_display_name: str
    author_icon_url: str | None
    post_url: str
    text: str
    language: str
    likes: int = 0
    reposts: int = 0
    replies: int = 0
    media: MediaPartition = field(default_factory=MediaPartition.empty)
    translated: bool = False

    @property
    def images(self) -> List[str]:
        return self.media.images

    @property
    def videos(self) -> List[str]:
        return self.media.videos

    @property
    def gifs(self) -> List[str]:
        return self.media.gifs

    @property
    def is_english(self) -> bool:
        return self.language == "en"

    @property
    def author_profile_url(self) -> str:
        return self.provider.profile_url(self.author_handle)

    def with_translation(self, text: str) -> "Post":
        """Return a copy carrying translated text; English posts are never marked translated."""
        if self.is_english:
            raise ValueError("English posts are not translated")
        return replace(self, text=text, translated=True)
