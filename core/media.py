"""
Media partitioning shared by the provider adapters.

A missing media container is never an error: it simply yields an empty partition.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.models.post import MediaPartition

logger = logging.getLogger(__name__)

IMAGE = "image"
VIDEO = "video"
GIF = "gif"
MEDIA_TYPES = (IMAGE, VIDEO, GIF)


def urls_by_type(media_list: Iterable, media_type: str) -> List[str]:
    """Filter-then-map: keep items tagged `media_type`, in their original order."""
    return [item.url for item in media_list if item.type == media_type and item.url]


def partition_typed_media(media_list: Optional[Iterable]) -> MediaPartition:
    """
    Split items carrying an explicit `type` tag into images / videos / gifs.

    Items with an unrecognized type are dropped and logged.
    """
    if not media_list:
        return MediaPartition.empty()

    items = list(media_list)
    unknown = [item.type for item in items if item.type not in MEDIA_TYPES]
    if unknown:
        logger.debug("Ignoring media items of unsupported type(s): %s", unknown)

    return MediaPartition(
        images=urls_by_type(items, IMAGE),
        videos=urls_by_type(items, VIDEO),
        gifs=urls_by_type(items, GIF),
    )


def partition_image_embed(image_urls: Optional[Iterable[str]]) -> MediaPartition:
    """An image-only container (Bluesky): every URL is an image, never video or gif."""
    if image_urls is None:
        return MediaPartition.empty()
    return MediaPartition(images=[url for url in image_urls if url])
