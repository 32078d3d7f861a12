"""
Tests package for Embed Bot

This package contains all unit and integration tests.

Test organization:
- test_links.py: Tests for link detection in message text
- test_normalize.py / test_media.py: Tests for provider adapters and media partitioning
- test_translate.py / test_pipeline.py: Tests for translation and the fetch pipeline
- test_fetcher.py: Tests for upstream fetching and the HTTP helper
- test_dispatcher.py / test_embeds.py: Tests for Discord presentation
- conftest.py: Shared fixtures and test utilities
"""

__version__ = "1.0.0"
