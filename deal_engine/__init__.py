"""
DEAL SHEET STRUCTURING ENGINE
Finance and lease payment math for side-by-side deal comparisons.
"""

from .calculators import calculate_finance, calculate_lease, round_money
from .models import CreditTier, DealDefaults, DealOption, DealSheet, FinanceResult, LeaseResult
from .options import DEFAULT_DEAL_DEFAULTS, create_blank_option, seed_option_from_dict
from .processor import DealSheetProcessor, calculate_option

__all__ = [
    'DealSheetProcessor',
    'calculate_option',
    'calculate_finance',
    'calculate_lease',
    'round_money',
    'create_blank_option',
    'seed_option_from_dict',
    'DEFAULT_DEAL_DEFAULTS',
    'CreditTier',
    'DealDefaults',
    'DealOption',
    'DealSheet',
    'FinanceResult',
    'LeaseResult',
]
