"""Utility modules for the balance game service."""

from .dates import format_date_seed, today_seed

__all__ = [
    "format_date_seed",
    "today_seed",
]
