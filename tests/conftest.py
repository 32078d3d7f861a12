"""Shared pytest fixtures and configuration

This file contains fixtures that can be used across all test files.
Pytest automatically discovers this file and makes fixtures available.
"""

import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from core.models.post import MediaPartition, Post, Provider

# ==================== Upstream Payloads ====================


@pytest.fixture
def tweet_payload():
    """A scrape API response for a Japanese tweet with mixed media"""
    return {
        "text": "今日はいい天気\n散歩に行こう",
        "lang": "ja",
        "user_name": "Sora",
        "user_screen_name": "sora_sky",
        "user_profile_image_url": "https://pbs.twimg.com/profile_images/1/sora.jpg",
        "tweetURL": "https://twitter.com/sora_sky/status/1790000000000000000",
        "likes": 120,
        "retweets": 7,
        "replies": 3,
        "media_extended": [
            {"type": "image", "url": "https://pbs.twimg.com/media/a.jpg"},
            {"type": "video", "url": "https://video.twimg.com/v1.mp4"},
            {"type": "image", "url": "https://pbs.twimg.com/media/b.jpg"},
            {"type": "gif", "url": "https://video.twimg.com/g1.mp4"},
            {"type": "video", "url": "https://video.twimg.com/v2.mp4"},
        ],
    }


@pytest.fixture
def english_tweet_payload(tweet_payload):
    """An English tweet with a single image"""
    payload = dict(tweet_payload)
    payload.update(
        {
            "text": "Lovely weather today",
            "lang": "en",
            "media_extended": [{"type": "image", "url": "https://pbs.twimg.com/media/only.jpg"}],
        }
    )
    return payload


@pytest.fixture
def bluesky_payload():
    """A getPostThread response for a German Bluesky post with two images"""
    return {
        "thread": {
            "$type": "app.bsky.feed.defs#threadViewPost",
            "post": {
                "uri": "at://did:plc:abc123/app.bsky.feed.post/3kxyzrkey",
                "cid": "bafyreicid",
                "author": {
                    "did": "did:plc:abc123",
                    "handle": "anna.bsky.social",
                    "displayName": "Anna",
                    "avatar": "https://cdn.bsky.app/img/avatar/anna.jpg",
                },
                "record": {
                    "$type": "app.bsky.feed.post",
                    "text": "Guten Morgen!",
                    "langs": ["de"],
                },
                "embed": {
                    "$type": "app.bsky.embed.images#view",
                    "images": [
                        {"thumb": "https://cdn.bsky.app/thumb/1.jpg", "fullsize": "https://cdn.bsky.app/full/1.jpg"},
                        {"thumb": "https://cdn.bsky.app/thumb/2.jpg", "fullsize": "https://cdn.bsky.app/full/2.jpg"},
                    ],
                },
                "likeCount": 10,
                "repostCount": 4,
                "quoteCount": 2,
                "replyCount": 1,
            },
            "replies": [],
        }
    }


# ==================== Canonical Posts ====================


@pytest.fixture
def make_post():
    """Factory for canonical Posts with sensible defaults"""

    def _make(**overrides):
        fields = {
            "provider": Provider.TWITTER,
            "author_handle": "sora_sky",
            "author_display_name": "Sora",
            "author_icon_url": "https://pbs.twimg.com/profile_images/1/sora.jpg",
            "post_url": "https://twitter.com/sora_sky/status/1",
            "text": "Lovely weather today",
            "language": "en",
            "likes": 1,
            "reposts": 2,
            "replies": 3,
            "media": MediaPartition.empty(),
        }
        fields.update(overrides)
        return Post(**fields)

    return _make


# ==================== Discord Mocks ====================


@pytest.fixture
def mock_channel():
    """A text channel whose send() is awaitable"""
    channel = Mock()
    channel.send = AsyncMock()
    return channel


@pytest.fixture
def make_message(mock_channel):
    """Factory for mock discord.Message objects posted by a guild member"""

    def _make(content, *, bot=False, nick="Sunny", global_name="Sunny Day"):
        message = Mock()
        message.id = 4242
        message.content = content
        message.channel = mock_channel
        message.author = Mock()
        message.author.bot = bot
        message.author.nick = nick
        message.author.global_name = global_name
        message.author.name = "sunny"
        message.author.display_avatar.url = "https://cdn.discordapp.com/avatars/1/abc.png"
        message.reply = AsyncMock()
        message.delete = AsyncMock()
        message.edit = AsyncMock()
        return message

    return _make


@pytest.fixture
def mock_http():
    """A mock HttpClient; configure return values per test"""
    http = Mock()
    http.get_json = Mock(return_value=None)
    http.head_content_length = Mock(return_value=None)
    http.get_bytes = Mock(return_value=b"\x00\x01media")
    return http


# ==================== File System Fixtures ====================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
