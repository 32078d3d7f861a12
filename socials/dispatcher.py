# socials/dispatcher.py
from __future__ import annotations

import asyncio
import io
import logging
from typing import List, Optional

import discord

from core.models.post import Post
from socials.embeds import build_embeds
from socials.types import DispatchContext, DispatchMode, MediaDelivery
from utils.config import DEFAULT_MAX_UPLOAD_BYTES
from utils.http import HttpClient
from utils.others import filename_from_url

logger = logging.getLogger(__name__)


def choose_delivery(size: Optional[int], max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> MediaDelivery:
    """
    File vs. link for a probed media asset.

    Anything above the attachment ceiling goes out as a bare URL. An unknown size is
    also sent as a link, since an upload that turns out too large would be rejected.
    """
    if size is None or size > max_upload_bytes:
        return MediaDelivery.LINK
    return MediaDelivery.FILE


def follow_up_media(post: Post) -> List[str]:
    """At most one video and one gif (the first of each); extras are dropped."""
    return [urls[0] for urls in (post.videos, post.gifs) if urls]


class Dispatcher:
    """
    Publishes a prepared Post back into the channel the link came from.

    - REPLY mode (message has commentary): reply to the original without pinging
      the author, then suppress its embeds.
    - REPLACE mode (link-only message): send the preview to the same channel, then
      delete the original. A failed send leaves the original in place.
    - Then the first video and first gif are sent as follow-ups, each either as a
      file or a bare URL depending on a HEAD size probe.
    """

    def __init__(self, http: HttpClient, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES):
        self.http = http
        self.max_upload_bytes = max_upload_bytes

    async def dispatch(self, post: Post, ctx: DispatchContext) -> None:
        message = ctx.message
        channel = message.channel
        embeds = build_embeds(post, ctx)

        if ctx.mode is DispatchMode.REPLY:
            await self._reply(message, embeds)
        else:
            await self._replace(message, channel, embeds)

        for url in follow_up_media(post):
            await self.send_media(channel, url)

    async def _reply(self, message, embeds: List[discord.Embed]) -> bool:
        try:
            await message.reply(embeds=embeds, mention_author=False)
        except discord.HTTPException:
            logger.exception("Could not reply to message %s; leaving it untouched.", message.id)
            return False
        logger.info("Replied to message %s with %d embed(s).", message.id, len(embeds))

        try:
            await message.edit(suppress=True)
        except discord.HTTPException:
            logger.exception("Could not suppress embeds on message %s", message.id)
        return True

    async def _replace(self, message, channel, embeds: List[discord.Embed]) -> bool:
        # The original is only deleted once its replacement is in the channel.
        try:
            await channel.send(embeds=embeds)
        except discord.HTTPException:
            logger.exception("Could not post preview for message %s; keeping the original.", message.id)
            return False

        try:
            await message.delete()
        except discord.HTTPException:
            logger.exception("Could not delete message %s", message.id)
        logger.info("Replaced message %s with %d embed(s).", message.id, len(embeds))
        return True

    async def probe(self, url: str) -> Optional[int]:
        logger.info("Probing media size via HEAD %s", url)
        return await asyncio.to_thread(self.http.head_content_length, url)

    async def send_media(self, channel, url: str) -> MediaDelivery:
        size = await self.probe(url)
        delivery = choose_delivery(size, self.max_upload_bytes)

        if delivery is MediaDelivery.FILE:
            data = await asyncio.to_thread(self.http.get_bytes, url)
            if data is None:
                delivery = MediaDelivery.LINK
            else:
                try:
                    file = discord.File(io.BytesIO(data), filename=filename_from_url(url))
                    await channel.send(file=file)
                    logger.info("Uploaded %s (%s bytes) as attachment.", url, size)
                    return delivery
                except discord.HTTPException:
                    logger.exception("Attachment upload failed for %s; sending link instead.", url)
                    delivery = MediaDelivery.LINK

        try:
            await channel.send(content=url)
            logger.info("Sent %s as link (size=%s).", url, size)
        except discord.HTTPException:
            logger.exception("Could not send media link %s", url)
        return delivery
