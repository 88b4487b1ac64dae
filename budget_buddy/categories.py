"""Default categories and helpers for seeding them."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List

from .config import get_default_category_specs
from .models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: List[Dict[str, str]] = get_default_category_specs()


def _slug(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.strip().lower()).strip('-')


def missing_default_categories(existing: Iterable[Category]) -> List[Category]:
    """Default categories the user does not have yet.

    Names are compared case-insensitively, so running the seed twice adds
    nothing the second time.  The returned records carry a provisional
    slug id; the storage layer assigns the real one.
    """
    existing_names = {category.name.strip().lower() for category in existing}
    missing = [
        Category(
            id=_slug(spec['name']),
            name=spec['name'],
            icon=spec.get('icon', ''),
            color=spec.get('color', ''),
            is_default=True,
        )
        for spec in DEFAULT_CATEGORIES
        if spec['name'].strip().lower() not in existing_names
    ]
    if missing:
        logger.debug("Seeding %d default categories", len(missing))
    return missing


def category_lookup(categories: Iterable[Category]) -> Dict[str, Category]:
    return {category.id: category for category in categories}


def deletable(category: Category) -> bool:
    """Seeded defaults cannot be deleted."""
    return not category.is_default
