"""Configuration for the budgeting core.

Defaults live in JSON files next to this module so they can be changed
without touching code; ``settings`` layers environment overrides on top.
"""

from .defaults import get_config_value, load_config
from .settings import (
    OTHER_CATEGORY_ID,
    OTHER_CATEGORY_NAME,
    get_budget_warning_percent,
    get_default_category_specs,
    get_default_currency,
    get_due_soon_days,
    get_fallback_rates,
    get_month_overflow_policy,
    get_supported_currencies,
    get_top_categories_count,
)

__all__ = [
    'load_config',
    'get_config_value',
    'OTHER_CATEGORY_ID',
    'OTHER_CATEGORY_NAME',
    'get_budget_warning_percent',
    'get_default_category_specs',
    'get_default_currency',
    'get_due_soon_days',
    'get_fallback_rates',
    'get_month_overflow_policy',
    'get_supported_currencies',
    'get_top_categories_count',
]
