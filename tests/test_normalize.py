"""Tests for the provider adapters (raw upstream JSON -> canonical Post)"""

import pytest

from core.models.post import Provider
from core.normalize import BlueskyAdapter, PostDecodeError, TwitterAdapter, normalize


class TestTwitterAdapter:
    """Scrape API payloads"""

    def test_fields_mapped(self, tweet_payload):
        """Author, stats and URL are copied from the payload"""
        post = TwitterAdapter().normalize(tweet_payload)

        assert post.provider is Provider.TWITTER
        assert post.author_handle == "sora_sky"
        assert post.author_display_name == "Sora"
        assert post.post_url == "https://twitter.com/sora_sky/status/1790000000000000000"
        assert post.language == "ja"
        assert (post.likes, post.reposts, post.replies) == (120, 7, 3)
        assert post.translated is False

    def test_media_partitioned_in_order(self, tweet_payload):
        """Media is filtered by type, preserving order within each bucket"""
        post = TwitterAdapter().normalize(tweet_payload)

        assert post.images == ["https://pbs.twimg.com/media/a.jpg", "https://pbs.twimg.com/media/b.jpg"]
        assert post.videos == ["https://video.twimg.com/v1.mp4", "https://video.twimg.com/v2.mp4"]
        assert post.gifs == ["https://video.twimg.com/g1.mp4"]

    def test_media_lists_are_disjoint_and_complete(self, tweet_payload):
        """Every recognized media item lands in exactly one list"""
        tweet_payload["media_extended"].append({"type": "audio", "url": "https://example.com/x.mp3"})

        post = TwitterAdapter().normalize(tweet_payload)

        buckets = [set(post.images), set(post.videos), set(post.gifs)]
        assert not (buckets[0] & buckets[1] or buckets[0] & buckets[2] or buckets[1] & buckets[2])
        recognized = {m["url"] for m in tweet_payload["media_extended"] if m["type"] in ("image", "video", "gif")}
        assert buckets[0] | buckets[1] | buckets[2] == recognized

    def test_missing_media_container(self, tweet_payload):
        """No media_extended key means no media, not an error"""
        del tweet_payload["media_extended"]

        post = TwitterAdapter().normalize(tweet_payload)

        assert (post.images, post.videos, post.gifs) == ([], [], [])

    def test_display_name_falls_back_to_handle(self, tweet_payload):
        del tweet_payload["user_name"]

        assert TwitterAdapter().normalize(tweet_payload).author_display_name == "sora_sky"

    def test_missing_lang_is_unknown(self, tweet_payload):
        tweet_payload["lang"] = None

        assert TwitterAdapter().normalize(tweet_payload).language == "und"

    @pytest.mark.parametrize("field", ["text", "user_screen_name", "tweetURL"])
    def test_missing_required_field(self, tweet_payload, field):
        """Required fields raise a typed decode error"""
        del tweet_payload[field]

        with pytest.raises(PostDecodeError):
            TwitterAdapter().normalize(tweet_payload)

    def test_non_object_payload(self):
        with pytest.raises(PostDecodeError):
            TwitterAdapter().normalize(["not", "a", "tweet"])


class TestBlueskyAdapter:
    """getPostThread payloads"""

    def test_fields_mapped(self, bluesky_payload):
        post = BlueskyAdapter().normalize(bluesky_payload)

        assert post.provider is Provider.BLUESKY
        assert post.author_handle == "anna.bsky.social"
        assert post.author_display_name == "Anna"
        assert post.author_icon_url == "https://cdn.bsky.app/img/avatar/anna.jpg"
        assert post.post_url == "https://bsky.app/profile/anna.bsky.social/post/3kxyzrkey"
        assert post.text == "Guten Morgen!"
        assert post.language == "de"

    def test_reposts_include_quotes(self, bluesky_payload):
        """Reposts are the sum of repost and quote counts"""
        post = BlueskyAdapter().normalize(bluesky_payload)

        assert (post.likes, post.reposts, post.replies) == (10, 6, 1)

    def test_images_use_fullsize(self, bluesky_payload):
        post = BlueskyAdapter().normalize(bluesky_payload)

        assert post.images == ["https://cdn.bsky.app/full/1.jpg", "https://cdn.bsky.app/full/2.jpg"]
        assert post.videos == []
        assert post.gifs == []

    def test_embed_without_images_key(self, bluesky_payload):
        """An embed that is not an image embed yields no media at all"""
        bluesky_payload["thread"]["post"]["embed"] = {
            "$type": "app.bsky.embed.external#view",
            "external": {"uri": "https://example.com", "title": "Example"},
        }

        post = BlueskyAdapter().normalize(bluesky_payload)

        assert (post.images, post.videos, post.gifs) == ([], [], [])

    def test_no_embed(self, bluesky_payload):
        del bluesky_payload["thread"]["post"]["embed"]

        post = BlueskyAdapter().normalize(bluesky_payload)

        assert post.images == []

    def test_missing_langs(self, bluesky_payload):
        del bluesky_payload["thread"]["post"]["record"]["langs"]

        assert BlueskyAdapter().normalize(bluesky_payload).language == "und"

    def test_missing_counts_default_to_zero(self, bluesky_payload):
        for key in ("likeCount", "repostCount", "quoteCount", "replyCount"):
            del bluesky_payload["thread"]["post"][key]

        post = BlueskyAdapter().normalize(bluesky_payload)

        assert (post.likes, post.reposts, post.replies) == (0, 0, 0)

    def test_not_found_post(self):
        """A notFoundPost thread node is a decode failure"""
        payload = {"thread": {"$type": "app.bsky.feed.defs#notFoundPost", "uri": "at://x/y/z", "notFound": True}}

        with pytest.raises(PostDecodeError):
            BlueskyAdapter().normalize(payload)

    def test_missing_author(self, bluesky_payload):
        del bluesky_payload["thread"]["post"]["author"]

        with pytest.raises(PostDecodeError):
            BlueskyAdapter().normalize(bluesky_payload)


class TestNormalizeDispatch:
    def test_dispatches_by_provider(self, tweet_payload, bluesky_payload):
        assert normalize(Provider.TWITTER, tweet_payload).provider is Provider.TWITTER
        assert normalize(Provider.BLUESKY, bluesky_payload).provider is Provider.BLUESKY
