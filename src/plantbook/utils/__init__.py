"""Utility functions for plantbook."""

from plantbook.utils.date_parser import parse_date, parse_period
from plantbook.utils.amount_parser import format_percent, parse_amount, parse_percent, parse_quantity
from plantbook.utils.equipment_resolver import resolve_equipment

__all__ = [
    "parse_date",
    "parse_period",
    "parse_amount",
    "parse_percent",
    "format_percent",
    "parse_quantity",
    "resolve_equipment",
]
