from flask import Flask, request, jsonify
from flask_cors import CORS
from deal_engine import DealSheetProcessor, seed_option_from_dict
from deal_engine.config import load_deal_defaults
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the portal and the embeddable widgets call the API)
CORS(app)

# Initialize the processor and the dealership defaults
processor = DealSheetProcessor()
deal_defaults = load_deal_defaults(os.environ.get("DEAL_DEFAULTS_PATH"))


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Deal Sheet Calculator API",
        "version": "1.0",
        "endpoints": {
            "defaults": "/defaults [GET]",
            "blank_option": "/blank_option [POST]",
            "calculate_option": "/calculate_option [POST]",
            "deal_sheet": "/deal_sheet [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/defaults", methods=["GET"])
def defaults():
    """Effective dealership defaults"""
    return jsonify(deal_defaults.to_dict()), 200


@app.route("/blank_option", methods=["POST"])
def blank_option():
    """
    Seed a new comparison column from the dealership defaults,
    or copy an existing one (duplicate_of), optionally under a credit tier
    """
    input_data = request.get_json(silent=True) or {}
    if not isinstance(input_data, dict):
        return jsonify({
            "error": "Request body must be a JSON object",
            "status": "failed"
        }), 400

    try:
        option = seed_option_from_dict(input_data, deal_defaults)
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    return jsonify(option.to_dict()), 200


@app.route("/calculate_option", methods=["POST"])
def calculate_option():
    """
    Price a single deal option
    """
    return _handle(processor.calculate_from_dict, "option")


@app.route("/deal_sheet", methods=["POST"])
def deal_sheet():
    """
    Price every option on a deal sheet
    """
    return _handle(processor.process_from_dict, "deal sheet")


def _handle(handler, kind):
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data or not isinstance(input_data, dict):
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        logger.info(f"Processing {kind}: {input_data.get('label') or input_data.get('title', 'Unknown')}")

        result = handler(input_data)

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
