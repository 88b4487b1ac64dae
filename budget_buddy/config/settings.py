"""Runtime settings for the budgeting core.

Values come from ``defaults.json`` and may be overridden through
environment variables.  The getters read the environment on every call so
a process can change behaviour without re-importing the package.  An
override that cannot be used is logged and the JSON default applies.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from .defaults import get_config_value

logger = logging.getLogger(__name__)

OVERFLOW_POLICIES = ('clamp', 'rollover')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


def get_due_soon_days() -> int:
    """Number of days after today that still count as "due soon"."""
    return _env_int(
        'BUDGETBUDDY_DUE_SOON_DAYS',
        int(get_config_value('defaults', 'bills', 'due_soon_days', default=7)),
    )


def get_budget_warning_percent() -> int:
    """Percentage of a budget at which progress turns into a warning."""
    return _env_int(
        'BUDGETBUDDY_BUDGET_WARNING',
        int(get_config_value('defaults', 'budgets', 'warning_percent', default=80)),
    )


def get_month_overflow_policy() -> str:
    """How recurring bills roll over from days missing in the next month."""
    default = get_config_value('defaults', 'bills', 'month_overflow_policy', default='clamp')
    raw = os.getenv('BUDGETBUDDY_MONTH_OVERFLOW')
    if raw is None or not raw.strip():
        return default
    policy = raw.strip().lower()
    if policy not in OVERFLOW_POLICIES:
        logger.warning(
            "Ignoring unknown BUDGETBUDDY_MONTH_OVERFLOW=%r, using %s", raw, default
        )
        return default
    return policy


def get_default_currency() -> str:
    default = get_config_value('defaults', 'currency', 'default', default='USD')
    return (os.getenv('BUDGETBUDDY_CURRENCY') or default).strip().upper()


def get_top_categories_count() -> int:
    return int(get_config_value('defaults', 'analytics', 'top_categories', default=5))


def get_supported_currencies() -> List[Dict[str, str]]:
    return list(get_config_value('defaults', 'currency', 'supported', default=[]))


def get_fallback_rates() -> Dict[str, float]:
    rates: Dict[str, Any] = get_config_value('defaults', 'currency', 'fallback_rates', default={'USD': 1})
    return {code: float(rate) for code, rate in rates.items()}


def get_default_category_specs() -> List[Dict[str, str]]:
    return list(get_config_value('defaults', 'categories', default=[]))


OTHER_CATEGORY_ID = get_config_value('defaults', 'analytics', 'other_category_id', default='other')
OTHER_CATEGORY_NAME = get_config_value('defaults', 'analytics', 'other_category_name', default='Other')
