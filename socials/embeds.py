from __future__ import annotations

from typing import List, Optional

import discord

from core.models.post import Post
from socials.types import DispatchContext

EMBED_COLOR = 0x0099FF
MAX_EMBEDS_PER_MESSAGE = 10
MAX_DESCRIPTION_LENGTH = 4096
MAX_AUTHOR_NAME_LENGTH = 256
MAX_FOOTER_LENGTH = 2048

LIKES = "❤️"
REPOSTS = "🔁"
REPLIES = "💬"
EMPTY_FIELD_VALUE = "\u200b"


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[: limit - 1] + "…"
    return text


def post_title(post: Post) -> str:
    noun = post.provider.post_noun
    return f"{noun} (Translated)" if post.translated else noun


def stats_line(post: Post) -> str:
    return f"{LIKES} {post.likes}    {REPOSTS} {post.reposts}    {REPLIES} {post.replies}"


def main_embed(post: Post, ctx: DispatchContext) -> discord.Embed:
    """
    Build the rich preview for a post.

    The first image (if any) is embedded inline; the rest are handled by
    `image_embeds()`. The footer credits the member who posted the link.
    """
    embed = discord.Embed(
        color=EMBED_COLOR,
        title=post_title(post),
        url=post.post_url,
        description=truncate(post.text, MAX_DESCRIPTION_LENGTH),
    )
    embed.set_author(
        name=truncate(f"{post.author_display_name} (@{post.author_handle})", MAX_AUTHOR_NAME_LENGTH),
        url=post.author_profile_url,
        icon_url=post.author_icon_url,
    )
    embed.add_field(name=stats_line(post), value=EMPTY_FIELD_VALUE, inline=False)
    if post.images:
        embed.set_image(url=post.images[0])
    embed.set_footer(text=truncate(f"Posted by {ctx.poster_label}", MAX_FOOTER_LENGTH), icon_url=ctx.avatar_url)
    return embed


def image_embeds(post_url: str, image_urls: List[str]) -> List[discord.Embed]:
    """Image-only embeds sharing the post URL, so Discord groups them as a gallery."""
    return [discord.Embed(url=post_url).set_image(url=url) for url in image_urls]


def build_embeds(post: Post, ctx: DispatchContext, limit: Optional[int] = MAX_EMBEDS_PER_MESSAGE) -> List[discord.Embed]:
    embeds = [main_embed(post, ctx), *image_embeds(post.post_url, post.images[1:])]
    return embeds[:limit] if limit else embeds
