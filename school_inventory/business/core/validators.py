"""
Input validation for payloads crossing the API boundary.
Each helper returns the normalized value or raises ValidationError.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from school_inventory.business.core.errors import ValidationError


class InputValidator:
    """Normalizes and checks raw JSON values"""

    EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
    MONEY_QUANTUM = Decimal('0.01')

    @staticmethod
    def required_text(value, field_name, min_length=1):
        if value is None or not isinstance(value, str) or len(value.strip()) < min_length:
            if min_length > 1:
                raise ValidationError(f"{field_name} must be at least {min_length} characters")
            raise ValidationError(f"{field_name} is required")
        return value.strip()

    @staticmethod
    def optional_text(value, field_name):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")
        return value

    @staticmethod
    def positive_int(value, field_name):
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{field_name} must be an integer")
        if value < 1:
            raise ValidationError(f"{field_name} must be a positive integer")
        return value

    @staticmethod
    def choice(value, field_name, choices):
        if value not in choices:
            raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
        return value

    @classmethod
    def email(cls, value, field_name='email'):
        if not isinstance(value, str) or not cls.EMAIL_PATTERN.match(value.strip()):
            raise ValidationError(f"{field_name} must be a valid email address")
        return value.strip()

    @classmethod
    def money(cls, value, field_name):
        """Numeric wire value -> Decimal with two places; None passes through"""
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValidationError(f"{field_name} must be a number")
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} must be a number")
        if not amount.is_finite():
            raise ValidationError(f"{field_name} must be a number")
        if amount < 0:
            raise ValidationError(f"{field_name} cannot be negative")
        return amount.quantize(cls.MONEY_QUANTUM, rounding=ROUND_HALF_UP)

    @staticmethod
    def timestamp(value, field_name):
        """ISO-8601 string (or datetime) -> naive UTC datetime; None passes through"""
        if value is None or isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be an ISO-8601 timestamp")
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO-8601 timestamp")
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
