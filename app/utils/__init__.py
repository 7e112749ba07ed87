"""
Utility functions for Gamepass API
"""
from app.utils.parsing import parse_int, parse_price, first_present

__all__ = [
    "parse_int", "parse_price", "first_present"
]
