"""
Deal Sheet Processor - Main Orchestrator

Routes each option to its calculator and assembles the payment cards for a
deal sheet.
"""

import json
import logging
from typing import Any, Dict

from .calculators import calculate_finance, calculate_lease
from .models import FINANCE, DealOption, DealSheet, FinanceResult, LeaseResult
from .output import OutputBuilder
from .validators import OptionValidator

logger = logging.getLogger(__name__)


def calculate_option(opt: DealOption) -> FinanceResult | LeaseResult:
    """Price an option with the calculator matching its type."""
    if opt.type == FINANCE:
        return calculate_finance(opt)
    return calculate_lease(opt)


class DealSheetProcessor:
    """
    Main orchestrator for deal sheet processing.

    Pipeline:
    1. Validate input (optional; the calculators themselves never raise)
    2. Calculate every option
    3. Build output
    """

    def __init__(self):
        self.validator = OptionValidator()
        self.output_builder = OutputBuilder()

    def process(self, sheet: DealSheet, validate: bool = True) -> Dict[str, Any]:
        """
        Process a deal sheet through the complete pipeline.

        Args:
            sheet: DealSheet with one to four options
            validate: run OptionValidator first; raises ValueError on bad input

        Returns:
            Deal sheet response with one card per option
        """
        if validate:
            self.validator.validate_sheet(sheet)

        cards = [self.calculate_card(option, validate=False) for option in sheet.options]

        logger.info(f"Processed deal sheet '{sheet.title}' with {len(cards)} option(s)")
        return self.output_builder.build_sheet(sheet, cards)

    def calculate_card(self, option: DealOption, validate: bool = True) -> Dict[str, Any]:
        """Validate (optionally) and price a single option."""
        if validate:
            self.validator.validate(option)
        result = calculate_option(option)
        return self.output_builder.build_card(option, result)

    def process_from_dict(self, data: Dict[str, Any], validate: bool = True) -> Dict[str, Any]:
        """
        Process a deal sheet from raw dictionary input.

        Convenience method for API usage.
        """
        return self.process(DealSheet.from_dict(data), validate=validate)

    def calculate_from_dict(self, data: Dict[str, Any], validate: bool = True) -> Dict[str, Any]:
        return self.calculate_card(DealOption.from_dict(data), validate=validate)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_deal_sheet_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """Process a deal sheet from Python dict and return Python dict."""
    processor = DealSheetProcessor()
    return processor.process_from_dict(input_data)


def process_deal_sheet_from_json(json_input: str) -> str:
    """
    Process a deal sheet from JSON string input and return JSON string output.
    Errors are reported in the payload rather than raised.
    """
    try:
        input_data = json.loads(json_input)
        result = process_deal_sheet_from_dict(input_data)
        return json.dumps(result, indent=2)

    except json.JSONDecodeError as e:
        error_response = {"error": f"Invalid JSON: {e}", "status": "failed"}
        return json.dumps(error_response, indent=2)

    except (ValueError, KeyError, TypeError) as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)
