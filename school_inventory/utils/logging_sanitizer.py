"""
Logging Sanitizer Utility

Redacts credentials from request payloads before they reach the log files.
"""

from typing import Dict, Any, Optional


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'password_hash',
    'confirm_password',
    'current_password',
    'new_password',
    'secret',
    'token',
    'api_key',
    'auth_token',
    'access_token',
    'refresh_token',
    'session_id',
    'csrf_token',
}


def sanitize_dict(data: Optional[Dict[str, Any]], redact_text: str = '[REDACTED]') -> Optional[Dict[str, Any]]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize (usually a parsed JSON request body)
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy; nested dictionaries and lists of dictionaries are
        sanitized recursively.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(entry, redact_text) if isinstance(entry, dict) else entry
                for entry in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def sanitize_exception_message(exception: Exception) -> str:
    """
    Return the exception message unless it looks like it carries a credential.
    """
    message = str(exception)

    if any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
