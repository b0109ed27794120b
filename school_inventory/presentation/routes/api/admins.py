from flask import jsonify
from flask_login import current_user, login_required

from school_inventory.business.core.admin_context import AdminContext
from school_inventory.logger import get_logger
from school_inventory.presentation.routes.api import api_bp
from school_inventory.presentation.routes.api.request_utils import json_body

logger = get_logger("school_inventory.routes.api.admins")


@api_bp.post('/admins')
@login_required
def create_admin():
    """createAdmin(username, email, password) -> Admin"""
    data = json_body()
    ctx = AdminContext.create(
        username=data.get('username'),
        email=data.get('email'),
        password=data.get('password'),
    )
    logger.info(f"Admin {ctx.admin.username} created by {current_user.username}")
    return jsonify(ctx.admin.to_dict()), 201
