from flask import jsonify, request
from flask_login import current_user, login_required

from school_inventory.business.core.partial_update import ItemUpdate
from school_inventory.business.inventory.inventory_manager import InventoryManager
from school_inventory.logger import get_logger
from school_inventory.presentation.routes.api import api_bp
from school_inventory.presentation.routes.api.request_utils import json_body
from school_inventory.services.inventory_service import InventoryService

logger = get_logger("school_inventory.routes.api.inventory")


@api_bp.post('/items')
@login_required
def create_item():
    item = InventoryManager().create(json_body())
    logger.info(f"Item {item.label_code} created by {current_user.username}")
    return jsonify(item.to_dict()), 201


@api_bp.get('/items')
@login_required
def list_items():
    return jsonify([item.to_dict() for item in InventoryService.list_items()])


# Registered before /items/<id> so "search" is never read as an id
@api_bp.get('/items/search')
@login_required
def search_items_by_label():
    label = request.args.get('label', '', type=str)
    return jsonify([item.to_dict() for item in InventoryService.search_by_label(label)])


@api_bp.get('/items/<int:item_id>')
@login_required
def get_item(item_id):
    """getItem(id) -> Item | null"""
    item = InventoryService.get_item(item_id)
    return jsonify(item.to_dict() if item else None)


@api_bp.patch('/items/<int:item_id>')
@login_required
def update_item(item_id):
    patch = ItemUpdate.from_dict(json_body())
    item = InventoryManager().update(item_id, patch)
    logger.info(f"Item {item.label_code} updated by {current_user.username}")
    return jsonify(item.to_dict())


@api_bp.delete('/items/<int:item_id>')
@login_required
def delete_item(item_id):
    deleted = InventoryManager().delete(item_id)
    logger.info(f"Item {item_id} deleted by {current_user.username}")
    return jsonify(deleted)
