"""
Admin Context (Core)
Creation, credential checks and default-account seeding for administrators.
"""

import secrets
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from school_inventory import db
from school_inventory.business.core.errors import AuthError, ConflictError, ValidationError
from school_inventory.business.core.validators import InputValidator
from school_inventory.data.admin import Admin
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.business.core.admin_context")


class AdminContext:
    """
    Wraps an Admin and provides the class-level entry points:
    - create(): new administrator with a hashed password
    - authenticate(): username/password check
    - ensure_default_admin(): idempotent start-up seeding
    """

    MIN_USERNAME_LENGTH = 3
    MIN_PASSWORD_LENGTH = 6

    def __init__(self, admin: Admin):
        self._admin = admin

    @property
    def admin(self) -> Admin:
        return self._admin

    @property
    def admin_id(self) -> int:
        return self._admin.id

    def issue_token(self) -> str:
        """Opaque session token handed to the front end after login"""
        return f"admin-{self._admin.id}-{secrets.token_urlsafe(24)}"

    @classmethod
    def create(cls, username: str, email: str, password: str, commit: bool = True) -> 'AdminContext':
        """
        Create a new administrator.

        Raises:
            ValidationError: short username/password or malformed email
            ConflictError: username or email already exists
        """
        username = InputValidator.required_text(username, 'username', min_length=cls.MIN_USERNAME_LENGTH)
        email = InputValidator.email(email)
        if not isinstance(password, str) or len(password) < cls.MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {cls.MIN_PASSWORD_LENGTH} characters")

        if Admin.query.filter_by(username=username).first():
            raise ConflictError(f"Username '{username}' already exists")
        if Admin.query.filter_by(email=email).first():
            raise ConflictError(f"Email '{email}' already exists")

        admin = Admin(username=username, email=email)
        admin.set_password(password)
        db.session.add(admin)

        try:
            if commit:
                db.session.commit()
            else:
                db.session.flush()
        except IntegrityError as e:
            db.session.rollback()
            raise ConflictError("Username or email already exists") from e

        logger.info(f"Created admin: {username}")
        return cls(admin)

    @classmethod
    def authenticate(cls, username: Optional[str], password: Optional[str]) -> 'AdminContext':
        """
        Raises:
            AuthError: unknown username or wrong password
        """
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthError("Username and password must be strings")
        if not username or not password:
            raise AuthError("Username and password are required")

        admin = Admin.query.filter_by(username=username).first()
        if admin is None or not admin.check_password(password):
            raise AuthError("Invalid username or password")

        return cls(admin)

    @classmethod
    def ensure_default_admin(cls) -> Optional[Admin]:
        """
        Create the configured default administrator if it does not exist.

        Never raises: a seeding failure is logged and start-up continues.

        Returns:
            The existing or newly created Admin, or None when seeding was skipped or failed.
        """
        username = current_app.config.get('DEFAULT_ADMIN_USERNAME', 'admin')
        email = current_app.config.get('DEFAULT_ADMIN_EMAIL', 'admin@school.edu')
        password = current_app.config.get('DEFAULT_ADMIN_PASSWORD')

        try:
            existing = Admin.query.filter_by(username=username).first()
            if existing is not None:
                logger.info(f"Default admin account '{username}' already exists")
                return existing

            if not password:
                logger.warning("DEFAULT_ADMIN_PASSWORD not set; skipping default admin creation")
                return None

            admin, created = Admin.find_or_create_from_dict(
                {'username': username, 'email': email, 'password': password},
                lookup_fields=['username'],
            )
            if created:
                logger.info(f"Default admin account created (username: {username})")
            return admin
        except Exception as e:
            db.session.rollback()
            logger.error(f"Failed to seed default admin account: {e}", exc_info=True)
            return None
