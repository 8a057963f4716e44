"""
Output Builder

Turns calculator results into the payment cards shown on screen and embedded
in exported deal sheets. Both surfaces read the same card, so the figures
never diverge.
"""

from .models import FINANCE, DealOption, DealSheet, FinanceResult, LeaseResult
from .calculators.rounding import round_money


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    return f"${value:,.2f}"


class OutputBuilder:
    """Builds payment cards and deal sheet responses."""

    def build_card(self, option: DealOption, result: FinanceResult | LeaseResult) -> dict:
        """Construct the card for one option."""
        snapshot = option.vehicle_snapshot
        return {
            "option_id": option.id,
            "label": option.label,
            "type": option.type,
            "credit_tier": option.credit_tier or None,
            "vehicle": snapshot.title if snapshot else None,
            "monthly_payment": result.monthly_payment,
            "term": option.term_months if option.type == FINANCE else option.lease_term,
            "result": result.to_dict(),
            "details": (
                self._finance_details(option, result)
                if option.type == FINANCE
                else self._lease_details(option, result)
            ),
        }

    def build_sheet(self, sheet: DealSheet, cards: list[dict]) -> dict:
        """Construct the deal sheet response from its cards."""
        lowest = min(cards, key=lambda c: c["monthly_payment"]) if cards else None
        return {
            "title": sheet.title,
            "customer_id": sheet.customer_id,
            "status": sheet.status,
            "option_count": len(cards),
            "cards": cards,
            "lowest_monthly_option_id": lowest["option_id"] if lowest else None,
        }

    def _finance_details(self, option: DealOption, result: FinanceResult) -> dict:
        taxes_and_fees = round_money(result.tax + result.total_fees)
        return {
            "amount_financed": {
                "value": result.amount_financed,
                "description": (
                    f"total_price ({_fmt(result.total_price)}) - down ({_fmt(option.down_payment)}) "
                    f"- net_trade ({_fmt(result.net_trade)}) = {_fmt(result.amount_financed)}"
                ),
            },
            "taxes_and_fees": {
                "value": taxes_and_fees,
                "description": f"tax ({_fmt(result.tax)}) + fees ({_fmt(result.total_fees)})",
            },
            "total_cost": {
                "value": result.total_cost,
                "description": (
                    f"down ({_fmt(option.down_payment)}) + {option.term_months} payments of "
                    f"{_fmt(result.monthly_payment)} at {option.apr:.2f}% APR"
                ),
            },
        }

    def _lease_details(self, option: DealOption, result: LeaseResult) -> dict:
        term = option.lease_term if option.lease_term > 0 else 1
        taxes_and_fees = round_money(option.total_fees + result.monthly_tax * term)
        return {
            "due_at_signing": {
                "value": result.due_at_signing,
                "description": (
                    f"down ({_fmt(option.down_payment)}) + first payment ({_fmt(result.monthly_payment)}) "
                    f"+ deposit ({_fmt(option.security_deposit)}) + acquisition ({_fmt(option.acquisition_fee)})"
                ),
            },
            "taxes_and_fees": {
                "value": taxes_and_fees,
                "description": (
                    f"fees ({_fmt(option.total_fees)}) + monthly tax ({_fmt(result.monthly_tax)}) x {term}"
                ),
            },
            "total_lease_cost": {
                "value": result.total_lease_cost,
                "description": (
                    f"{term} payments of {_fmt(result.monthly_payment)}, "
                    f"{option.annual_mileage:,} mi/yr, residual {_fmt(result.residual_value)}"
                ),
            },
        }
