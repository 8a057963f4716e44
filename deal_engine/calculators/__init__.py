"""
Calculators Package

Pure pricing functions for finance and lease options.
"""

from .finance import calculate_finance
from .lease import calculate_lease
from .rounding import round_money

__all__ = [
    "calculate_finance",
    "calculate_lease",
    "round_money",
]
