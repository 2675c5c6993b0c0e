from .resolver import effective_kinds, resolve
from .thresholds import DEFAULT_THRESHOLDS, is_valid_table, level_for, select_table
from .validator import validate

__all__ = [
    "DEFAULT_THRESHOLDS",
    "effective_kinds",
    "is_valid_table",
    "level_for",
    "resolve",
    "select_table",
    "validate",
]
