"""
Tests for deal option models, the blank-option factory and defaults loading.
"""

import json
from dataclasses import FrozenInstanceError, replace

import pytest

from deal_engine.config import load_deal_defaults
from deal_engine.models import CreditTier, DealDefaults, DealOption, DealSheet
from deal_engine.options import (
    DEFAULT_DEAL_DEFAULTS,
    apply_credit_tier,
    create_blank_option,
    duplicate_option,
    next_option_label,
    seed_option_from_dict,
)


class TestCreateBlankOption:
    """Test seeding a new comparison column."""

    def test_builtin_fallbacks(self):
        opt = create_blank_option("opt_1", "Option A")

        assert opt.type == "finance"
        assert opt.doc_fee == 499
        assert opt.title_reg_fee == 350
        assert opt.tax_rate == 8.875
        assert opt.credit_tier == ""
        assert opt.apr == 5.99
        assert opt.money_factor == 0.0011
        assert opt.term_months == 60
        assert opt.lease_term == 36
        assert opt.residual_pct == 58
        assert opt.annual_mileage == 10000
        assert opt.excess_mileage_charge == 0.25
        assert opt.acquisition_fee == 895
        assert opt.disposition_fee == 395

    def test_money_fields_zeroed(self):
        opt = create_blank_option("opt_1", "Option A", DEFAULT_DEAL_DEFAULTS)

        for name in ("selling_price", "msrp", "down_payment", "trade_value", "trade_payoff",
                     "rebates", "other_fees", "security_deposit"):
            assert getattr(opt, name) == 0
        assert opt.vehicle_id is None
        assert opt.vehicle_snapshot is None

    def test_tier_supplies_rates(self):
        tier = DEFAULT_DEAL_DEFAULTS.credit_tiers[2]
        opt = create_blank_option("opt_2", "Option B", DEFAULT_DEAL_DEFAULTS, tier)

        assert opt.credit_tier == "Tier 3 (650-699)"
        assert opt.apr == 8.99
        assert opt.money_factor == 0.002

    def test_dealership_defaults_override(self):
        defaults = DealDefaults.from_dict(
            {"doc_fee": 799, "default_tax_rate": 6.25, "default_finance_term": 72},
            base=DEFAULT_DEAL_DEFAULTS,
        )
        opt = create_blank_option("opt_1", "Option A", defaults)

        assert opt.doc_fee == 799
        assert opt.tax_rate == 6.25
        assert opt.term_months == 72
        # untouched keys keep the built-in values
        assert opt.title_reg_fee == 350
        assert defaults.credit_tiers == DEFAULT_DEAL_DEFAULTS.credit_tiers


class TestOptionEditing:
    """Test re-tiering, duplication and labels."""

    def test_options_are_immutable(self):
        opt = create_blank_option("opt_1", "Option A")
        with pytest.raises(FrozenInstanceError):
            opt.apr = 1.9

    def test_tier_change_updates_finance_apr_only(self):
        opt = create_blank_option("opt_1", "Option A")
        tier = CreditTier(name="Tier 4 (600-649)", apr=12.99, money_factor=0.003)
        updated = apply_credit_tier(opt, tier)

        assert updated.credit_tier == "Tier 4 (600-649)"
        assert updated.apr == 12.99
        assert updated.money_factor == opt.money_factor
        assert opt.apr == 5.99

    def test_tier_change_updates_lease_money_factor_only(self):
        opt = replace(create_blank_option("opt_1", "Option A"), type="lease")
        tier = CreditTier(name="Tier 4 (600-649)", apr=12.99, money_factor=0.003)
        updated = apply_credit_tier(opt, tier)

        assert updated.money_factor == 0.003
        assert updated.apr == opt.apr

    def test_duplicate_keeps_terms(self):
        opt = create_blank_option("opt_1", "Option A")
        dup = duplicate_option(opt, "opt_2", "Option B")

        assert dup.id == "opt_2"
        assert dup.label == "Option B"
        assert dup.apr == opt.apr
        assert dup.term_months == opt.term_months

    def test_labels(self):
        assert next_option_label(0) == "Option A"
        assert next_option_label(3) == "Option D"
        assert next_option_label(4) == "Option 5"


class TestSeedOption:
    """Test building the next column from a request payload."""

    def test_defaults_to_first_column(self):
        opt = seed_option_from_dict({})
        assert opt == create_blank_option("opt_1", "Option A", DEFAULT_DEAL_DEFAULTS)

    def test_explicit_id_and_label(self):
        opt = seed_option_from_dict({"id": "x", "label": "Best rate", "index": 3})
        assert opt.id == "x"
        assert opt.label == "Best rate"

    def test_tier_seeds_rates(self):
        opt = seed_option_from_dict({"index": 1, "tier": "Tier 2 (700-749)"})
        assert opt.label == "Option B"
        assert opt.apr == 6.49
        assert opt.money_factor == 0.0015

    def test_unknown_tier(self):
        with pytest.raises(ValueError, match="Unknown credit tier"):
            seed_option_from_dict({"tier": "Tier 9"})

    def test_bad_index(self):
        with pytest.raises(ValueError, match="Invalid index"):
            seed_option_from_dict({"index": [1]})

    def test_duplicate_retiers_active_rate(self):
        source = replace(create_blank_option("opt_1", "Option A"), selling_price=31000).to_dict()
        opt = seed_option_from_dict({"index": 1, "duplicate_of": source, "tier": "Tier 3 (650-699)"})

        assert opt.id == "opt_2"
        assert opt.selling_price == 31000
        assert opt.apr == 8.99
        assert opt.money_factor == 0.0011

    def test_duplicate_without_tier_keeps_rates(self):
        source = create_blank_option("opt_1", "Option A", tier=DEFAULT_DEAL_DEFAULTS.credit_tiers[0])
        opt = seed_option_from_dict({"index": 1, "duplicate_of": source.to_dict()})

        assert opt == duplicate_option(source, "opt_2", "Option B")


class TestModelParsing:
    """Test dict parsing of the surrounding system's payloads."""

    def test_option_from_dict(self):
        opt = DealOption.from_dict({
            "id": "opt_1",
            "label": "Option A",
            "type": "lease",
            "selling_price": "32000",
            "lease_term": "39",
            "money_factor": 0.0012,
            "vehicle_snapshot": {"year": 2024, "make": "Honda", "model": "Accord", "trim": "EX", "msrp": 33500},
        })

        assert opt.type == "lease"
        assert opt.selling_price == 32000.0
        assert opt.lease_term == 39
        assert opt.down_payment == 0.0
        assert opt.vehicle_snapshot.title == "2024 Honda Accord EX"
        assert opt.vehicle_snapshot.msrp == 33500.0

    def test_option_round_trip(self):
        opt = create_blank_option("opt_1", "Option A")
        assert DealOption.from_dict(opt.to_dict()) == opt

    def test_null_fields_fall_back(self):
        opt = DealOption.from_dict({"id": 7, "rebates": None, "other_fees_label": None})
        assert opt.id == "7"
        assert opt.rebates == 0.0
        assert opt.other_fees_label == ""
        assert opt.type == "finance"

    def test_infinite_term_rejected(self):
        with pytest.raises(ValueError, match="lease_term must be a finite number"):
            DealOption.from_dict({"id": "a", "type": "lease", "lease_term": float("inf")})

    def test_sheet_from_dict(self):
        sheet = DealSheet.from_dict({"options": [{"id": "a"}, {"id": "b", "type": "lease"}]})
        assert sheet.title == "Deal Sheet"
        assert sheet.status == "draft"
        assert [o.id for o in sheet.options] == ["a", "b"]

    def test_find_tier(self):
        assert DEFAULT_DEAL_DEFAULTS.find_tier("Tier 1 (750+)").apr == 4.99
        assert DEFAULT_DEAL_DEFAULTS.find_tier("Tier 9") is None


class TestLoadDealDefaults:
    """Test dealership defaults loading."""

    def test_unset_path_uses_builtins(self):
        assert load_deal_defaults(None) is DEFAULT_DEAL_DEFAULTS

    def test_loads_dealership_record(self, tmp_path):
        path = tmp_path / "dealership.json"
        path.write_text(json.dumps({
            "name": "Main Street Motors",
            "deal_defaults": {
                "doc_fee": 599,
                "credit_tiers": [{"name": "Prime", "apr": 3.49, "money_factor": 0.0009}],
            },
        }))
        defaults = load_deal_defaults(str(path))

        assert defaults.doc_fee == 599
        assert defaults.acquisition_fee == 895
        assert [t.name for t in defaults.credit_tiers] == ["Prime"]

    def test_loads_bare_defaults(self, tmp_path):
        path = tmp_path / "defaults.json"
        path.write_text(json.dumps({"default_lease_term": 24}))

        assert load_deal_defaults(str(path)).default_lease_term == 24

    def test_defaults_to_dict_lists_tiers(self):
        data = DEFAULT_DEAL_DEFAULTS.to_dict()
        assert len(data["credit_tiers"]) == 5
        assert data["credit_tiers"][0] == {"name": "Tier 1 (750+)", "apr": 4.99, "money_factor": 0.0011}
