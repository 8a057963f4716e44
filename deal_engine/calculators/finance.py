"""
Finance Calculator

Amortizing-loan math for a retail purchase. Works in full float precision and
rounds only the returned fields.
"""

from ..models import DealOption, FinanceResult
from .rounding import round_money


def monthly_payment(amount_financed: float, apr: float, term_months: int) -> float:
    """
    Level monthly payment that retires ``amount_financed`` over the term.

    ``apr`` is an annual percent. A zero rate pays straight-line; an empty
    loan or a non-positive term pays nothing.
    """
    if term_months <= 0 or amount_financed <= 0:
        return 0.0
    if apr == 0:
        return amount_financed / term_months

    r = apr / 12 / 100
    try:
        growth = (1 + r) ** term_months
    except OverflowError:
        # growth / (growth - 1) -> 1
        return amount_financed * r
    if growth == 1:
        return amount_financed / term_months
    return amount_financed * (r * growth) / (growth - 1)


def calculate_finance(opt: DealOption) -> FinanceResult:
    """
    Price a finance option.

    subtotal        = selling price + fees - rebates
    total price     = subtotal + tax on subtotal
    amount financed = total price - down payment - net trade (never below 0)
    """
    net_trade = opt.net_trade
    total_fees = opt.total_fees
    subtotal = opt.selling_price + total_fees - opt.rebates
    tax = subtotal * (opt.tax_rate / 100)
    total_price = subtotal + tax
    amount_financed = max(0.0, total_price - opt.down_payment - net_trade)

    payment = monthly_payment(amount_financed, opt.apr, opt.term_months)

    total_of_payments = payment * opt.term_months
    total_interest = total_of_payments - amount_financed
    total_cost = opt.down_payment + total_of_payments

    return FinanceResult(
        net_trade=round_money(net_trade),
        total_fees=round_money(total_fees),
        subtotal=round_money(subtotal),
        tax=round_money(tax),
        total_price=round_money(total_price),
        amount_financed=round_money(amount_financed),
        monthly_payment=round_money(payment),
        total_of_payments=round_money(total_of_payments),
        total_interest=round_money(total_interest),
        total_cost=round_money(total_cost),
    )
