from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from school_inventory import db
from school_inventory.business.core.errors import ConflictError
from school_inventory.business.core.validators import InputValidator
from school_inventory.data.school_user import USER_ROLES, User
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.business.core.user_manager")


class UserManager:
    """Registers students and teachers. Users are immutable once created."""

    @staticmethod
    def create(data: Dict[str, Any], commit: bool = True) -> User:
        """
        Raises:
            ValidationError: missing name, malformed email, unknown role
            ConflictError: email already registered
        """
        fields = {
            'name': InputValidator.required_text(data.get('name'), 'name'),
            'email': InputValidator.email(data.get('email')),
            'role': InputValidator.choice(data.get('role'), 'role', USER_ROLES),
            'student_id': InputValidator.optional_text(data.get('student_id'), 'student_id'),
            'department': InputValidator.optional_text(data.get('department'), 'department'),
        }

        if User.query.filter(func.lower(User.email) == fields['email'].lower()).first():
            raise ConflictError(f"Email '{fields['email']}' already exists")

        try:
            user = User.create_from_dict(fields, commit=commit)
        except IntegrityError as e:
            raise ConflictError(f"Email '{fields['email']}' already exists") from e

        logger.info(f"Registered {user.role} {user.id} ({user.email})")
        return user
