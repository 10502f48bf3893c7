"""Post date formatting in the site's configured timezone"""

import logging
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from markupsafe import Markup

from sitepub.core.models import Timestamp
from sitepub.core.site import DEFAULT_TIMEFORMAT, DEFAULT_TIMEZONE, SiteConfig


logger = logging.getLogger(__name__)


def _zone(name: str | None) -> tzinfo:
    """Resolve a tz database name; unknown or empty names fall back to the default zone."""
    name = name or DEFAULT_TIMEZONE
    if name == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using %s", name, DEFAULT_TIMEZONE)
        return timezone.utc


def format_timestamp(date: datetime | None, config: SiteConfig) -> Timestamp | None:
    """Return the 'Posted on ...' display string and ISO-8601 form of date, or None without a date."""
    if date is None:
        return None
    local = date.astimezone(_zone(config.extra.timezone))
    fmt = config.extra.timeformat or DEFAULT_TIMEFORMAT
    return Timestamp(display=f"Posted on {local.strftime(fmt)}", iso=local.isoformat())


def time_tag(date: datetime | None, config: SiteConfig) -> Markup:
    """<time datetime="iso">Posted on ...</time>, or '' without a date."""
    stamp = format_timestamp(date, config)
    if stamp is None:
        return Markup("")
    return Markup('<time datetime="{}">{}</time>').format(stamp.iso, stamp.display)
