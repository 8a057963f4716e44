"""
AWS Lambda handler for the Deal Sheet Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from deal_engine import DealSheetProcessor, seed_option_from_dict
from deal_engine.config import load_deal_defaults

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize processor and defaults (reused across warm invocations)
processor = DealSheetProcessor()
deal_defaults = load_deal_defaults(os.environ.get("DEAL_DEFAULTS_PATH"))

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /defaults
    - POST /blank_option
    - POST /calculate_option
    - POST /deal_sheet
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/defaults" and http_method == "GET":
        return _response(200, deal_defaults.to_dict())
    elif path == "/blank_option" and http_method == "POST":
        return handle_blank_option(event)
    elif path == "/calculate_option" and http_method == "POST":
        return handle_calculate(event, processor.calculate_from_dict)
    elif path == "/deal_sheet" and http_method == "POST":
        return handle_calculate(event, processor.process_from_dict)
    else:
        return _response(404, {"error": "Not found", "path": path})


def _response(status, payload):
    return {"statusCode": status, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Deal Sheet Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "defaults": "/defaults [GET]",
                "blank_option": "/blank_option [POST]",
                "calculate_option": "/calculate_option [POST]",
                "deal_sheet": "/deal_sheet [POST]",
                "health": "/health [GET]",
            },
        },
    )


def handle_blank_option(event):
    """Seed or copy a comparison column. An empty body seeds the first one."""
    try:
        body = event.get("body") or {}
        if isinstance(body, str):
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not isinstance(input_data, dict):
            return _response(400, {"error": "Request body must be a JSON object", "status": "failed"})

        option = seed_option_from_dict(input_data, deal_defaults)
        return _response(200, option.to_dict())

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})


def handle_calculate(event, handler):
    """Run a pricing handler over the request body."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not isinstance(input_data, dict):
            return _response(400, {"error": "Request body must be a JSON object", "status": "failed"})

        name = input_data.get("label") or input_data.get("title", "Unknown")
        logger.info(f"Processing: {name}")

        result = handler(input_data)

        logger.info(f"Processed successfully: {name}")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors (missing fields, invalid types, out-of-range rates)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
