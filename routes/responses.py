from datetime import datetime

from flask import jsonify, request

from inventory.exceptions import ValidationError


def success_response(data=None, message=None, status=200):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error_response(message, status=400):
    return jsonify({
        "success": False,
        "error": message,
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }), status


def get_json_body():
    """Parsed JSON object from the request; an empty body counts as ``{}``."""
    if not request.get_data():
        return {}
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValidationError("body", "json", "Invalid JSON")
    return data


def get_page_args(default_limit=10, max_limit=100):
    page = request.args.get("page", 1, type=int) or 1
    limit = request.args.get("limit", default_limit, type=int) or default_limit
    return max(page, 1), min(max(limit, 1), max_limit)
