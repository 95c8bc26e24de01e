"""Slug allocation: derives unique, URL-safe identifiers from display names.

Collisions resolve deterministically: the base slug first, then ``base-1``,
``base-2``, ... until a free one is found.

Uniqueness is checked at call time only. Two concurrent allocations for the
same name can both pick the same slug; the unique index on ``slug`` rejects
the second write with DuplicateError.
"""

import logging
from itertools import count
from typing import Protocol

from slugify import slugify

logger = logging.getLogger(__name__)

FALLBACK_SLUG = 'user'


class SlugLookup(Protocol):
    def slug_exists(self, slug: str) -> bool: ...


def slugify_name(text: str) -> str:
    """Convert free text to a lowercase, hyphen-separated slug.

    Example:
        slugify_name('Ann Lee') → 'ann-lee'
        slugify_name('!!!') → 'user'
    """
    return slugify(text or '') or FALLBACK_SLUG


def generate_slug(repo: SlugLookup, text: str) -> str:
    """Return a slug for text that no stored account currently uses."""
    base = slugify_name(text)
    if not repo.slug_exists(base):
        return base

    for n in count(1):
        candidate = f"{base}-{n}"
        if not repo.slug_exists(candidate):
            logger.debug("Slug collision resolved", extra={"base": base, "slug": candidate})
            return candidate
