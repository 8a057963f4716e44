"""
Dealership configuration loading.

A dealership may ship a JSON file with its ``deal_defaults`` (fees, tax rate,
terms, credit tiers). Keys it leaves out keep the built-in values.
"""

import json
import logging
from pathlib import Path

from .models import DealDefaults
from .options import DEFAULT_DEAL_DEFAULTS

logger = logging.getLogger(__name__)


def load_deal_defaults(path: str | None) -> DealDefaults:
    """Load dealership defaults from ``path``, or the built-ins when unset."""
    if not path:
        return DEFAULT_DEAL_DEFAULTS

    data = json.loads(Path(path).read_text())
    # Accept either the bare defaults or a dealership record wrapping them
    data = data.get("deal_defaults", data)
    defaults = DealDefaults.from_dict(data, base=DEFAULT_DEAL_DEFAULTS)

    logger.info(f"Loaded deal defaults from {path} ({len(defaults.credit_tiers)} credit tiers)")
    return defaults
