"""Utility functions for nabreport."""

from nabreport.utils.date_parser import parse_date, get_date_range

__all__ = ["parse_date", "get_date_range"]
