from flask import jsonify
from flask_login import current_user, login_required

from school_inventory.business.borrowing.borrowing_manager import BorrowingManager
from school_inventory.logger import get_logger
from school_inventory.presentation.routes.api import api_bp
from school_inventory.presentation.routes.api.request_utils import json_body
from school_inventory.services.borrowing_service import BorrowingService

logger = get_logger("school_inventory.routes.api.borrowings")


@api_bp.post('/borrowings')
@login_required
def borrow():
    """
    Body: item_id, user_id, quantity_borrowed, borrowing_duration_days, notes
    """
    data = json_body()
    record = BorrowingManager().borrow(
        item_id=data.get('item_id'),
        user_id=data.get('user_id'),
        quantity=data.get('quantity_borrowed'),
        duration_days=data.get('borrowing_duration_days'),
        notes=data.get('notes'),
    )
    logger.info(f"Borrowing {record.id} recorded by {current_user.username}")
    return jsonify(record.to_dict()), 201


@api_bp.post('/borrowings/<int:record_id>/return')
@login_required
def return_item(record_id):
    data = json_body(required=False)
    record = BorrowingManager().return_item(record_id, notes=data.get('notes'))
    logger.info(f"Borrowing {record.id} returned by {current_user.username}")
    return jsonify(record.to_dict())


@api_bp.get('/borrowings')
@login_required
def list_borrowing_records():
    return jsonify([record.to_dict() for record in BorrowingService.list_records()])


@api_bp.get('/borrowings/active')
@login_required
def list_active_borrowings():
    return jsonify([record.to_dict() for record in BorrowingService.active_borrowings()])


@api_bp.get('/borrowings/overdue')
@login_required
def list_overdue_items():
    return jsonify([row.to_dict() for row in BorrowingService.overdue_items()])


@api_bp.post('/borrowings/sweep-overdue')
@login_required
def sweep_overdue():
    count = BorrowingManager().sweep_overdue()
    return jsonify({"updated": count})
