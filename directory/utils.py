# directory/utils.py
"""Shared utilities: logging setup and slug helpers."""
import logging
import re
from . import config

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def get_logger(name=__name__):
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, config.LOG_LEVEL, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("directory")


def slugify(value: str) -> str:
    """Lower-case `value`, collapse non-alphanumeric runs to '-' and trim dashes."""
    return _NON_SLUG.sub("-", (value or "").lower()).strip("-")


def listing_slug(name: str, city: str) -> str:
    return slugify(f"{name} {city}")


def suffixed(slug: str, n: int) -> str:
    # first occurrence keeps the bare slug
    return slug if n <= 1 else f"{slug}-{n}"
