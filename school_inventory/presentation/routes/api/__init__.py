"""
JSON API blueprint

Each procedure of the remote interface is one route. Domain errors are turned
into {"success": false, "message": ...} with the status code of their class;
anything unexpected is logged and answered with a fixed generic message.
"""

from datetime import datetime

from flask import Blueprint, jsonify
from flask_wtf.csrf import generate_csrf
from werkzeug.exceptions import HTTPException

from school_inventory import db
from school_inventory.business.core.errors import InventoryDomainError
from school_inventory.logger import get_logger
from school_inventory.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("school_inventory.routes.api")

api_bp = Blueprint('api', __name__)

GENERIC_FAILURE_MESSAGE = "The request could not be completed. Please try again."


@api_bp.app_errorhandler(InventoryDomainError)
def handle_domain_error(error):
    db.session.rollback()
    logger.warning(f"{type(error).__name__}: {sanitize_exception_message(error)}")
    return jsonify({"success": False, "message": str(error)}), error.status_code


@api_bp.app_errorhandler(Exception)
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return jsonify({"success": False, "message": error.description}), error.code
    db.session.rollback()
    logger.error(f"Unhandled error: {sanitize_exception_message(error)}", exc_info=True)
    return jsonify({"success": False, "message": GENERIC_FAILURE_MESSAGE}), 500


@api_bp.get('/healthcheck')
def healthcheck():
    return jsonify({"status": "ok", "timestamp": datetime.utcnow().isoformat()})


@api_bp.get('/csrf-token')
def csrf_token():
    """Token the front end echoes back in the X-CSRFToken header"""
    return jsonify({"csrf_token": generate_csrf()})


from . import admins, inventory, users, borrowings, reports  # noqa: E402,F401
