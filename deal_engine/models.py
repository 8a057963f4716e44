"""
Domain Models for the Deal Sheet Engine

These dataclasses describe one proposed finance or lease structure and the
figures computed from it. Inputs are frozen; edits produce new instances.
"""

import math
from dataclasses import asdict, dataclass, field

FINANCE = "finance"
LEASE = "lease"
OPTION_TYPES = (FINANCE, LEASE)

MAX_OPTIONS = 4


def _num(data: dict, key: str, default: float = 0.0) -> float:
    value = data.get(key)
    return float(value) if value is not None else float(default)


def _int(data: dict, key: str, default: int = 0) -> int:
    value = data.get(key)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{key} must be a finite number, got: {value}")
    return int(value) if value is not None else int(default)


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================


@dataclass(frozen=True)
class CreditTier:
    """A named financing risk bucket with a default APR and money factor."""

    name: str
    apr: float
    money_factor: float

    @classmethod
    def from_dict(cls, data: dict) -> "CreditTier":
        return cls(
            name=data["name"],
            apr=float(data["apr"]),
            money_factor=float(data["money_factor"]),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DealDefaults:
    """Dealership-level configuration used to seed new deal options."""

    credit_tiers: tuple[CreditTier, ...] = ()
    doc_fee: float = 499.0
    title_reg_fee: float = 350.0
    default_tax_rate: float = 8.875
    default_lease_term: int = 36
    default_finance_term: int = 60
    default_annual_mileage: int = 10000
    excess_mileage_charge: float = 0.25
    acquisition_fee: float = 895.0
    disposition_fee: float = 395.0

    def find_tier(self, name: str | None) -> CreditTier | None:
        for tier in self.credit_tiers:
            if tier.name == name:
                return tier
        return None

    @classmethod
    def from_dict(cls, data: dict, base: "DealDefaults | None" = None) -> "DealDefaults":
        """
        Build defaults from a dealership's ``deal_defaults`` payload.

        Keys missing from ``data`` are taken from ``base`` (or the dataclass
        defaults), so a dealership may override only part of the config.
        """
        base = base or cls()
        tiers = data.get("credit_tiers")
        return cls(
            credit_tiers=(
                tuple(CreditTier.from_dict(t) for t in tiers) if tiers is not None else base.credit_tiers
            ),
            doc_fee=_num(data, "doc_fee", base.doc_fee),
            title_reg_fee=_num(data, "title_reg_fee", base.title_reg_fee),
            default_tax_rate=_num(data, "default_tax_rate", base.default_tax_rate),
            default_lease_term=_int(data, "default_lease_term", base.default_lease_term),
            default_finance_term=_int(data, "default_finance_term", base.default_finance_term),
            default_annual_mileage=_int(data, "default_annual_mileage", base.default_annual_mileage),
            excess_mileage_charge=_num(data, "excess_mileage_charge", base.excess_mileage_charge),
            acquisition_fee=_num(data, "acquisition_fee", base.acquisition_fee),
            disposition_fee=_num(data, "disposition_fee", base.disposition_fee),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["credit_tiers"] = [t.to_dict() for t in self.credit_tiers]
        return data


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class VehicleSnapshot:
    """Vehicle attributes captured when the option was created."""

    year: int | None = None
    make: str | None = None
    model: str | None = None
    trim: str | None = None
    vin: str | None = None
    stock_number: str | None = None
    mileage: int | None = None
    exterior_color: str | None = None
    msrp: float | None = None

    @property
    def title(self) -> str:
        parts = [self.year, self.make, self.model, self.trim]
        return " ".join(str(p) for p in parts if p)

    @classmethod
    def from_dict(cls, data: dict) -> "VehicleSnapshot":
        return cls(
            year=data.get("year"),
            make=data.get("make"),
            model=data.get("model"),
            trim=data.get("trim"),
            vin=data.get("vin"),
            stock_number=data.get("stock_number"),
            mileage=data.get("mileage"),
            exterior_color=data.get("exterior_color"),
            msrp=float(data["msrp"]) if data.get("msrp") is not None else None,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DealOption:
    """
    One proposed finance or lease structure.

    Only the fields relevant to ``type`` are read by the matching calculator;
    the rest are carried along untouched so an operator can flip the type.
    Percent fields (``tax_rate``, ``apr``, ``residual_pct``) are whole
    percents; ``money_factor`` is a plain decimal.
    """

    id: str
    label: str
    type: str = FINANCE

    vehicle_id: str | None = None
    vehicle_snapshot: VehicleSnapshot | None = None

    # Pricing
    selling_price: float = 0.0
    msrp: float = 0.0
    down_payment: float = 0.0
    trade_value: float = 0.0
    trade_payoff: float = 0.0
    rebates: float = 0.0
    doc_fee: float = 0.0
    title_reg_fee: float = 0.0
    other_fees: float = 0.0
    other_fees_label: str = ""
    tax_rate: float = 0.0
    credit_tier: str = ""

    # Finance
    apr: float = 0.0
    term_months: int = 0

    # Lease
    money_factor: float = 0.0
    residual_pct: float = 0.0
    lease_term: int = 0
    annual_mileage: int = 0
    excess_mileage_charge: float = 0.0
    acquisition_fee: float = 0.0
    disposition_fee: float = 0.0
    security_deposit: float = 0.0

    @property
    def total_fees(self) -> float:
        return self.doc_fee + self.title_reg_fee + self.other_fees

    @property
    def net_trade(self) -> float:
        """Trade equity; an upside-down trade contributes nothing."""
        return max(0.0, self.trade_value - self.trade_payoff)

    @classmethod
    def from_dict(cls, data: dict) -> "DealOption":
        snapshot = data.get("vehicle_snapshot")
        return cls(
            id=str(data["id"]),
            label=data.get("label") or "",
            type=data.get("type", FINANCE),
            vehicle_id=data.get("vehicle_id"),
            vehicle_snapshot=VehicleSnapshot.from_dict(snapshot) if snapshot else None,
            selling_price=_num(data, "selling_price"),
            msrp=_num(data, "msrp"),
            down_payment=_num(data, "down_payment"),
            trade_value=_num(data, "trade_value"),
            trade_payoff=_num(data, "trade_payoff"),
            rebates=_num(data, "rebates"),
            doc_fee=_num(data, "doc_fee"),
            title_reg_fee=_num(data, "title_reg_fee"),
            other_fees=_num(data, "other_fees"),
            other_fees_label=data.get("other_fees_label") or "",
            tax_rate=_num(data, "tax_rate"),
            credit_tier=data.get("credit_tier") or "",
            apr=_num(data, "apr"),
            term_months=_int(data, "term_months"),
            money_factor=_num(data, "money_factor"),
            residual_pct=_num(data, "residual_pct"),
            lease_term=_int(data, "lease_term"),
            annual_mileage=_int(data, "annual_mileage"),
            excess_mileage_charge=_num(data, "excess_mileage_charge"),
            acquisition_fee=_num(data, "acquisition_fee"),
            disposition_fee=_num(data, "disposition_fee"),
            security_deposit=_num(data, "security_deposit"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DealSheet:
    """A customer-facing comparison of up to four deal options."""

    title: str
    options: tuple[DealOption, ...] = field(default_factory=tuple)
    customer_id: str | None = None
    status: str = "draft"

    @classmethod
    def from_dict(cls, data: dict) -> "DealSheet":
        return cls(
            title=data.get("title") or "Deal Sheet",
            options=tuple(DealOption.from_dict(o) for o in data.get("options", [])),
            customer_id=data.get("customer_id"),
            status=data.get("status", "draft"),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class FinanceResult:
    """Figures for an amortizing loan, rounded to cents."""

    net_trade: float
    total_fees: float
    subtotal: float
    tax: float
    total_price: float
    amount_financed: float
    monthly_payment: float
    total_of_payments: float
    total_interest: float
    total_cost: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LeaseResult:
    """Figures for a closed-end lease, rounded to cents."""

    net_trade: float
    gross_cap_cost: float
    cap_cost_reduction: float
    adjusted_cap_cost: float
    residual_value: float
    depreciation: float
    monthly_depreciation: float
    monthly_rent_charge: float
    pre_tax_monthly: float
    monthly_tax: float
    monthly_payment: float
    due_at_signing: float
    total_lease_cost: float

    def to_dict(self) -> dict:
        return asdict(self)
