"""
Lease Calculator

Capitalized cost / depreciation / rent charge model for a closed-end lease.
"""

from ..models import DealOption, LeaseResult
from .rounding import round_money


def residual_base(opt: DealOption) -> float:
    """MSRP when known, otherwise the selling price."""
    return opt.msrp if opt.msrp > 0 else opt.selling_price


def calculate_lease(opt: DealOption) -> LeaseResult:
    """
    Price a lease option.

    Monthly payment = (depreciation / term) + (adjusted cap cost + residual)
    * money factor, with tax applied to the monthly stream. The first payment
    is collected at signing, so it is counted once in the total lease cost.

    Nothing is rounded until the result is built; rounding the payment first
    drifts the totals by a few cents over a long term.
    """
    net_trade = opt.net_trade
    gross_cap_cost = opt.selling_price + opt.acquisition_fee + opt.total_fees
    cap_cost_reduction = opt.down_payment + net_trade + opt.rebates
    adjusted_cap_cost = gross_cap_cost - cap_cost_reduction

    residual_value = residual_base(opt) * (opt.residual_pct / 100)
    depreciation = adjusted_cap_cost - residual_value

    term = opt.lease_term if opt.lease_term > 0 else 1
    monthly_depreciation = depreciation / term
    monthly_rent_charge = (adjusted_cap_cost + residual_value) * opt.money_factor
    pre_tax_monthly = monthly_depreciation + monthly_rent_charge
    monthly_tax = pre_tax_monthly * (opt.tax_rate / 100)
    monthly_payment = pre_tax_monthly + monthly_tax

    due_at_signing = opt.down_payment + monthly_payment + opt.security_deposit + opt.acquisition_fee
    total_lease_cost = monthly_payment * term + due_at_signing - monthly_payment

    return LeaseResult(
        net_trade=round_money(net_trade),
        gross_cap_cost=round_money(gross_cap_cost),
        cap_cost_reduction=round_money(cap_cost_reduction),
        adjusted_cap_cost=round_money(adjusted_cap_cost),
        residual_value=round_money(residual_value),
        depreciation=round_money(depreciation),
        monthly_depreciation=round_money(monthly_depreciation),
        monthly_rent_charge=round_money(monthly_rent_charge),
        pre_tax_monthly=round_money(pre_tax_monthly),
        monthly_tax=round_money(monthly_tax),
        monthly_payment=round_money(monthly_payment),
        due_at_signing=round_money(due_at_signing),
        total_lease_cost=round_money(total_lease_cost),
    )
