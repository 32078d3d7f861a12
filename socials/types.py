from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class DispatchMode(str, Enum):
    """How the preview is presented relative to the triggering message."""

    REPLY = "reply"  # keep the original (it has commentary), suppress its embeds, reply
    REPLACE = "replace"  # link-only message: delete it and post the preview in its place


class MediaDelivery(str, Enum):
    """How a video/gif follow-up is delivered."""

    FILE = "file"  # uploaded as an attachment
    LINK = "link"  # bare URL, the destination renders its own preview


@dataclass
class DispatchContext:
    """Per-message presentation data for the triggering message.

    message:        the discord.Message that contained the link
    trailing_text:  whatever the poster wrote besides the link ("" when link-only)
    nickname:       the poster's server nickname, if any
    display_name:   the poster's global display name (falls back to username)
    avatar_url:     the poster's server-scoped avatar
    """

    message: Any
    trailing_text: str = ""
    nickname: Optional[str] = None
    display_name: str = ""
    avatar_url: Optional[str] = None

    @classmethod
    def from_message(cls, message: Any, trailing_text: str) -> "DispatchContext":
        author = message.author
        display_name = getattr(author, "global_name", None) or getattr(author, "name", "") or ""
        display_avatar = getattr(author, "display_avatar", None)
        return cls(
            message=message,
            trailing_text=trailing_text,
            nickname=getattr(author, "nick", None),
            display_name=display_name,
            avatar_url=str(display_avatar.url) if display_avatar is not None else None,
        )

    @property
    def poster_label(self) -> str:
        if self.nickname:
            return f"{self.nickname} ({self.display_name})"
        return self.display_name

    @property
    def mode(self) -> DispatchMode:
        return DispatchMode.REPLY if self.trailing_text else DispatchMode.REPLACE
