"""Unit tests for core/timestamps.py"""

from datetime import datetime, timezone

from sitepub.core.site import SiteConfig
from sitepub.core.timestamps import format_timestamp, time_tag


DATE = datetime(2024, 2, 14, 15, 30, tzinfo=timezone.utc)


def test_format_timestamp_defaults():
    """Default format and zone apply when the config omits them."""
    stamp = format_timestamp(DATE, SiteConfig())
    assert stamp.display == "Posted on February 14, 2024 at 15:30 UTC"
    assert stamp.iso == "2024-02-14T15:30:00+00:00"


def test_format_timestamp_configured_zone_and_format():
    config = SiteConfig(extra={"timezone": "Europe/Paris", "timeformat": "%Y-%m-%d %H:%M"})
    stamp = format_timestamp(DATE, config)
    assert stamp.display == "Posted on 2024-02-14 16:30"
    assert stamp.iso == "2024-02-14T16:30:00+01:00"


def test_format_timestamp_unknown_zone_falls_back():
    stamp = format_timestamp(DATE, SiteConfig(extra={"timezone": "Mars/Olympus"}))
    assert stamp.iso == "2024-02-14T15:30:00+00:00"


def test_format_timestamp_empty_format_uses_default():
    stamp = format_timestamp(DATE, SiteConfig(extra={"timeformat": ""}))
    assert stamp.display.endswith("at 15:30 UTC")


def test_format_timestamp_no_date():
    assert format_timestamp(None, SiteConfig()) is None


def test_time_tag():
    html = time_tag(DATE, SiteConfig(extra={"timeformat": "%Y-%m-%d"}))
    assert html == '<time datetime="2024-02-14T15:30:00+00:00">Posted on 2024-02-14</time>'
    assert time_tag(None, SiteConfig()) == ""
