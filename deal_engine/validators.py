"""
Input Validation for the Deal Sheet Engine

The calculators never reject input; they clamp and guard so a page or
document always renders. Callers that accept operator input run these checks
first and surface the ValueError to a human.
"""

import math

from .models import FINANCE, LEASE, MAX_OPTIONS, OPTION_TYPES, DealOption, DealSheet

MONEY_FIELDS = (
    "selling_price",
    "msrp",
    "down_payment",
    "trade_value",
    "trade_payoff",
    "rebates",
    "doc_fee",
    "title_reg_fee",
    "other_fees",
    "acquisition_fee",
    "disposition_fee",
    "security_deposit",
    "excess_mileage_charge",
)


class OptionValidator:
    """Validates deal options according to business rules."""

    def validate(self, option: DealOption) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self._validate_type(option)
        self._validate_amounts(option)
        self._validate_percent("tax_rate", option.tax_rate)

        if option.type == FINANCE:
            self._validate_finance(option)
        elif option.type == LEASE:
            self._validate_lease(option)

    def validate_sheet(self, sheet: DealSheet) -> None:
        if not sheet.options:
            raise ValueError("A deal sheet needs at least one option")
        if len(sheet.options) > MAX_OPTIONS:
            raise ValueError(f"A deal sheet holds at most {MAX_OPTIONS} options, got: {len(sheet.options)}")

        seen = set()
        for option in sheet.options:
            if option.id in seen:
                raise ValueError(f"Duplicate option id: {option.id}")
            seen.add(option.id)
            self.validate(option)

    def _validate_type(self, option: DealOption) -> None:
        if option.type not in OPTION_TYPES:
            raise ValueError(f"Invalid type: {option.type}. Must be 'finance' or 'lease'")

    def _validate_amounts(self, option: DealOption) -> None:
        for name in MONEY_FIELDS:
            value = getattr(option, name)
            self._validate_finite(name, value)
            if value < 0:
                raise ValueError(f"{name} cannot be negative, got: {value}")

    def _validate_finite(self, name: str, value: float) -> None:
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number, got: {value}")

    def _validate_percent(self, name: str, value: float) -> None:
        self._validate_finite(name, value)
        if not (0 <= value <= 100):
            raise ValueError(f"{name} must be between 0 and 100, got: {value}")

    def _validate_finance(self, option: DealOption) -> None:
        self._validate_percent("apr", option.apr)
        self._validate_finite("term_months", option.term_months)
        if option.term_months <= 0:
            raise ValueError(f"term_months must be positive, got: {option.term_months}")

    def _validate_lease(self, option: DealOption) -> None:
        self._validate_percent("residual_pct", option.residual_pct)
        for name in ("money_factor", "lease_term", "annual_mileage"):
            self._validate_finite(name, getattr(option, name))
        if not (0 <= option.money_factor < 1):
            raise ValueError(f"money_factor must be a decimal between 0 and 1, got: {option.money_factor}")
        if option.lease_term <= 0:
            raise ValueError(f"lease_term must be positive, got: {option.lease_term}")
        if option.annual_mileage < 0:
            raise ValueError(f"annual_mileage cannot be negative, got: {option.annual_mileage}")
