from flask import jsonify
from flask_login import login_required

from school_inventory.business.core.user_manager import UserManager
from school_inventory.presentation.routes.api import api_bp
from school_inventory.presentation.routes.api.request_utils import json_body
from school_inventory.services.user_service import UserService


@api_bp.post('/users')
@login_required
def create_user():
    user = UserManager.create(json_body())
    return jsonify(user.to_dict()), 201


@api_bp.get('/users')
@login_required
def list_users():
    return jsonify([user.to_dict() for user in UserService.list_users()])
