"""
Detection of Twitter/X and Bluesky post links inside raw chat message text.

Only the first link in a message is honored. Anything after it (including more links)
is left to the caller as free text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from core.models.post import Provider

TWITTER_LINK_RE = re.compile(
    r"https?://(?:www\.|mobile\.)?"
    r"(?:twitter|x|fxtwitter|vxtwitter|fixupx|fixvx)\.com/"
    r"(?:i/web|(?P<user>\w+))/status(?:es)?/(?P<status_id>\d+)"
    r"(?:[/?#][^\s<>]*)?",
    re.IGNORECASE,
)

BLUESKY_LINK_RE = re.compile(
    r"https?://(?:www\.)?bsky\.app/profile/"
    r"(?P<actor>[A-Za-z0-9._:%-]+)/post/(?P<rkey>[A-Za-z0-9]+)"
    r"(?:[/?#][^\s<>]*)?",
    re.IGNORECASE,
)

BLUESKY_POST_COLLECTION = "app.bsky.feed.post"


@dataclass(frozen=True)
class LinkMatch:
    """
    A single provider link found in a message.

    provider:  which platform the link points to
    post_id:   numeric status id (Twitter) or at:// URI of the post (Bluesky)
    span:      (start, end) offsets of the whole link inside the message text
    url:       the matched link text
    """

    provider: Provider
    post_id: str
    span: Tuple[int, int]
    url: str

    def remaining_text(self, content: str) -> str:
        """The message text with the matched link removed, stripped of outer whitespace."""
        start, end = self.span
        return (content[:start] + content[end:]).strip()


def bluesky_at_uri(actor: str, rkey: str) -> str:
    return f"at://{actor}/{BLUESKY_POST_COLLECTION}/{rkey}"


def find_first_link(content: Optional[str]) -> Optional[LinkMatch]:
    """
    Return the earliest Twitter or Bluesky post link in `content`, or None.

    Example:
        >>> m = find_first_link("look https://x.com/jack/status/20 wow")
        >>> (m.provider, m.post_id)
        (<Provider.TWITTER: 'twitter'>, '20')
    """
    if not content:
        return None

    candidates = []

    tweet = TWITTER_LINK_RE.search(content)
    if tweet:
        candidates.append(
            LinkMatch(
                provider=Provider.TWITTER,
                post_id=tweet.group("status_id"),
                span=tweet.span(),
                url=tweet.group(0),
            )
        )

    skeet = BLUESKY_LINK_RE.search(content)
    if skeet:
        candidates.append(
            LinkMatch(
                provider=Provider.BLUESKY,
                post_id=bluesky_at_uri(skeet.group("actor"), skeet.group("rkey")),
                span=skeet.span(),
                url=skeet.group(0),
            )
        )

    if not candidates:
        return None
    return min(candidates, key=lambda m: m.span[0])
