"""
Deal Option Factory

Seeds new comparison columns from dealership defaults and a credit tier.
"""

from dataclasses import replace

from .models import FINANCE, LEASE, CreditTier, DealDefaults, DealOption

DEFAULT_DEAL_DEFAULTS = DealDefaults(
    credit_tiers=(
        CreditTier(name="Tier 1 (750+)", apr=4.99, money_factor=0.0011),
        CreditTier(name="Tier 2 (700-749)", apr=6.49, money_factor=0.0015),
        CreditTier(name="Tier 3 (650-699)", apr=8.99, money_factor=0.002),
        CreditTier(name="Tier 4 (600-649)", apr=12.99, money_factor=0.003),
        CreditTier(name="Tier 5 (<600)", apr=17.99, money_factor=0.004),
    ),
)

# Used when no tier is selected
FALLBACK_APR = 5.99
FALLBACK_MONEY_FACTOR = 0.0011
DEFAULT_RESIDUAL_PCT = 58.0

OPTION_LETTERS = "ABCD"


def create_blank_option(
    id: str,
    label: str,
    defaults: DealDefaults | None = None,
    tier: CreditTier | None = None,
) -> DealOption:
    """
    Build a new finance option with every dollar amount zeroed.

    Fees, tax rate, terms and mileage come from ``defaults`` (the built-in
    dealership defaults when omitted); APR and money factor come from ``tier``.
    """
    defaults = defaults or DEFAULT_DEAL_DEFAULTS
    return DealOption(
        id=id,
        label=label,
        type=FINANCE,
        doc_fee=defaults.doc_fee,
        title_reg_fee=defaults.title_reg_fee,
        tax_rate=defaults.default_tax_rate,
        credit_tier=tier.name if tier else "",
        apr=tier.apr if tier else FALLBACK_APR,
        term_months=defaults.default_finance_term,
        money_factor=tier.money_factor if tier else FALLBACK_MONEY_FACTOR,
        residual_pct=DEFAULT_RESIDUAL_PCT,
        lease_term=defaults.default_lease_term,
        annual_mileage=defaults.default_annual_mileage,
        excess_mileage_charge=defaults.excess_mileage_charge,
        acquisition_fee=defaults.acquisition_fee,
        disposition_fee=defaults.disposition_fee,
    )


def apply_credit_tier(option: DealOption, tier: CreditTier) -> DealOption:
    """
    Re-tier an option.

    Only the rate the option actually uses is replaced: APR for finance,
    money factor for lease.
    """
    return replace(
        option,
        credit_tier=tier.name,
        apr=tier.apr if option.type == FINANCE else option.apr,
        money_factor=tier.money_factor if option.type == LEASE else option.money_factor,
    )


def duplicate_option(option: DealOption, id: str, label: str) -> DealOption:
    return replace(option, id=id, label=label)


def next_option_label(index: int) -> str:
    """'Option A' for index 0 through 'Option D'; numbered after that."""
    if 0 <= index < len(OPTION_LETTERS):
        return f"Option {OPTION_LETTERS[index]}"
    return f"Option {index + 1}"


def seed_option_from_dict(data: dict, defaults: DealDefaults = DEFAULT_DEAL_DEFAULTS) -> DealOption:
    """
    Build the next comparison column from an API request.

    ``index`` picks the default id and label. ``tier`` names one of the
    dealership's credit tiers. ``duplicate_of`` carries an existing option to
    copy under the new id and label, re-tiered when ``tier`` is given;
    without it a blank option is seeded from ``defaults``.
    Raises ValueError for a bad index, an unknown tier or a malformed copy.
    """
    try:
        index = int(data.get("index", 0))
    except (ValueError, TypeError, OverflowError):
        raise ValueError(f"Invalid index: {data.get('index')}") from None

    tier_name = data.get("tier")
    tier = defaults.find_tier(tier_name)
    if tier_name and tier is None:
        raise ValueError(f"Unknown credit tier: {tier_name}")

    option_id = data.get("id") or f"opt_{index + 1}"
    label = data.get("label") or next_option_label(index)

    source = data.get("duplicate_of")
    if source is None:
        return create_blank_option(option_id, label, defaults, tier)
    if not isinstance(source, dict):
        raise ValueError("duplicate_of must be an option object")

    option = duplicate_option(DealOption.from_dict(source), option_id, label)
    return apply_credit_tier(option, tier) if tier else option
