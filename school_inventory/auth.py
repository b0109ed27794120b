from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from school_inventory import limiter
from school_inventory.business.core.admin_context import AdminContext
from school_inventory.business.core.errors import AuthError
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.auth")
auth = Blueprint('auth', __name__)


@auth.post('/login')
@limiter.limit(lambda: current_app.config['LOGIN_RATE_LIMIT'])
def login():
    """
    login(username, password) -> {admin, token} | null

    A credential mismatch answers 200 with a JSON null rather than an error.
    """
    data = request.get_json(silent=True) or {}
    username = data.get('username') if isinstance(data, dict) else None
    password = data.get('password') if isinstance(data, dict) else None

    logger.debug(f"Login attempt for username: {username}")

    try:
        ctx = AdminContext.authenticate(username, password)
    except AuthError as e:
        logger.warning(f"Failed login attempt for username: {username} ({e})")
        return jsonify(None)

    login_user(ctx.admin)
    logger.info(f"Successful login for admin: {ctx.admin.username}")

    return jsonify({"admin": ctx.admin.to_dict(), "token": ctx.issue_token()})


@auth.post('/logout')
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"Admin logged out: {username}")
    return jsonify({"success": True})
