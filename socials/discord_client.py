from __future__ import annotations

import logging

import discord

from core.links import find_first_link
from core.pipeline import PostPipeline
from socials.dispatcher import Dispatcher
from socials.types import DispatchContext

logger = logging.getLogger(__name__)


def default_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class EmbedBotClient(discord.Client):
    """
    Discord gateway client.

    discord.py runs each `on_message` as its own task; the pipeline and dispatcher are
    shared read-only handles, so concurrent messages never touch shared mutable state.
    """

    def __init__(self, pipeline: PostPipeline, dispatcher: Dispatcher, **kwargs):
        kwargs.setdefault("intents", default_intents())
        kwargs.setdefault("allowed_mentions", discord.AllowedMentions.none())
        super().__init__(**kwargs)
        self.pipeline = pipeline
        self.dispatcher = dispatcher

    async def on_ready(self):
        logger.info("%s is ready!", self.user)

    async def on_message(self, message: discord.Message):
        await handle_message(message, self.pipeline, self.dispatcher)


async def handle_message(message, pipeline: PostPipeline, dispatcher: Dispatcher) -> bool:
    """
    Run the full link -> preview pipeline for one message.

    Returns True when a preview was dispatched, False when the message was ignored
    (bot author, no link, or the upstream post was unavailable).
    """
    if message.author.bot:
        return False

    match = find_first_link(message.content)
    if match is None:
        return False

    logger.info("Found %s link %s in message %s", match.provider.value, match.post_id, message.id)
    post = await pipeline.build_post(match)
    if post is None:
        return False

    ctx = DispatchContext.from_message(message, match.remaining_text(message.content))
    await dispatcher.dispatch(post, ctx)
    return True
