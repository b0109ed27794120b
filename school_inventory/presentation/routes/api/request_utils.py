from flask import request

from school_inventory.business.core.errors import ValidationError
from school_inventory.logger import get_logger
from school_inventory.utils.logging_sanitizer import sanitize_dict

logger = get_logger("school_inventory.routes.api.request")


def json_body(required=True):
    """Parsed JSON object from the request; ValidationError when it is not an object"""
    data = request.get_json(silent=True)
    if data is None:
        if required:
            raise ValidationError("Request body must be a JSON object")
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    logger.debug(f"{request.method} {request.path} payload: {sanitize_dict(data)}")
    return data
