from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from school_inventory import db
from school_inventory.business.core.errors import ConflictError, NotFoundError, ValidationError
from school_inventory.business.core.partial_update import ItemUpdate
from school_inventory.business.core.validators import InputValidator
from school_inventory.data.borrowing_record import BorrowingRecord
from school_inventory.data.inventory_item import ITEM_TYPES, InventoryItem
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.business.inventory.inventory_manager")

# Statuses whose units are still out on loan
OUTSTANDING_STATUSES = ('active', 'overdue')


class InventoryManager:
    """
    Core inventory operations.

    Responsibilities:
    - Create, patch and delete InventoryItem rows
    - Keep 0 <= quantity_available <= quantity_total on every path
    - Provide adjust_availability() for the borrowing lifecycle, which runs
      inside the caller's transaction
    """

    def _get_item(self, item_id: int, *, lock: bool = False) -> InventoryItem:
        query = db.session.query(InventoryItem).filter(InventoryItem.id == item_id)
        if lock:
            query = query.with_for_update()
        item = query.first()
        if item is None:
            raise NotFoundError(f"Inventory item with id {item_id} not found")
        return item

    def _ensure_label_free(self, label_code: str, *, exclude_id: int | None = None) -> None:
        query = InventoryItem.query.filter(func.lower(InventoryItem.label_code) == label_code.lower())
        if exclude_id is not None:
            query = query.filter(InventoryItem.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Label code '{label_code}' is already in use")

    def outstanding_quantity(self, item_id: int) -> int:
        """Units of the item currently out on active or overdue loans"""
        total = (
            db.session.query(func.coalesce(func.sum(BorrowingRecord.quantity_borrowed), 0))
            .filter(
                BorrowingRecord.item_id == item_id,
                BorrowingRecord.status.in_(OUTSTANDING_STATUSES),
            )
            .scalar()
        )
        return int(total or 0)

    def create(self, data: Dict[str, Any], *, commit: bool = True) -> InventoryItem:
        """
        Create an item with every unit available.

        Raises:
            ValidationError: missing/invalid fields
            ConflictError: label_code already used
        """
        fields = {
            'name': InputValidator.required_text(data.get('name'), 'name'),
            'description': InputValidator.optional_text(data.get('description'), 'description'),
            'item_type': InputValidator.choice(data.get('item_type'), 'item_type', ITEM_TYPES),
            'label_code': InputValidator.required_text(data.get('label_code'), 'label_code'),
            'quantity_total': InputValidator.positive_int(data.get('quantity_total'), 'quantity_total'),
            'location': InputValidator.optional_text(data.get('location'), 'location'),
            'purchase_date': InputValidator.timestamp(data.get('purchase_date'), 'purchase_date'),
            'purchase_price': InputValidator.money(data.get('purchase_price'), 'purchase_price'),
            'condition_notes': InputValidator.optional_text(data.get('condition_notes'), 'condition_notes'),
        }
        fields['quantity_available'] = fields['quantity_total']

        self._ensure_label_free(fields['label_code'])

        item = InventoryItem.from_dict(fields)
        db.session.add(item)
        self._flush_or_commit(commit, f"label code '{fields['label_code']}' is already in use")

        logger.info(f"Created inventory item {item.id} ({item.label_code}) with {item.quantity_total} units")
        return item

    def update(self, item_id: int, patch: ItemUpdate, *, commit: bool = True) -> InventoryItem:
        """
        Apply a partial update.

        Only fields present in the patch are written; explicit None clears an
        optional column. A new quantity_total re-derives quantity_available
        from the units still out on loan.

        Raises:
            NotFoundError: unknown item
            ValidationError: invalid value, or total below the borrowed quantity
            ConflictError: label_code taken by another item
        """
        item = self._get_item(item_id, lock=True)
        changes = self._validate_patch(patch)

        if 'label_code' in changes and changes['label_code'].lower() != item.label_code.lower():
            self._ensure_label_free(changes['label_code'], exclude_id=item.id)

        if 'quantity_total' in changes:
            borrowed = self.outstanding_quantity(item.id)
            new_available = changes['quantity_total'] - borrowed
            if new_available < 0:
                raise ValidationError("cannot reduce total below currently borrowed quantity")
            changes['quantity_available'] = new_available

        for key, value in changes.items():
            setattr(item, key, value)
        item.updated_at = datetime.utcnow()

        self._flush_or_commit(commit, f"label code '{item.label_code}' is already in use")

        logger.info(f"Updated inventory item {item.id}: {sorted(changes)}")
        return item

    def delete(self, item_id: int, *, commit: bool = True) -> bool:
        """
        Delete an item that has nothing out on loan.

        Raises:
            NotFoundError: unknown item
            ConflictError: active or overdue borrowings reference the item
        """
        item = self._get_item(item_id, lock=True)

        open_loans = item.borrowing_records.filter(
            BorrowingRecord.status.in_(OUTSTANDING_STATUSES)
        ).count()
        if open_loans:
            raise ConflictError("Cannot delete item with active borrowings")

        # Returned loans go with the item
        BorrowingRecord.query.filter(BorrowingRecord.item_id == item.id).delete(synchronize_session='fetch')
        db.session.delete(item)
        if commit:
            db.session.commit()
        else:
            db.session.flush()

        logger.info(f"Deleted inventory item {item_id}")
        return True

    def adjust_availability(self, item: InventoryItem, delta: int) -> InventoryItem:
        """
        Move quantity_available by delta (negative for borrow, positive for return).

        Does not commit; callers pair it with the BorrowingRecord write.
        """
        new_available = item.quantity_available + delta
        if new_available < 0:
            raise ValidationError("insufficient quantity available")
        if new_available > item.quantity_total:
            raise ValidationError(
                f"Availability of item {item.id} cannot exceed its total quantity of {item.quantity_total}"
            )
        item.quantity_available = new_available
        item.updated_at = datetime.utcnow()
        return item

    def _validate_patch(self, patch: ItemUpdate) -> Dict[str, Any]:
        changes = {}
        for key, value in patch.provided().items():
            if value is None and key in ItemUpdate.REQUIRED:
                raise ValidationError(f"{key} cannot be cleared")
            if key == 'name':
                value = InputValidator.required_text(value, key)
            elif key == 'label_code':
                value = InputValidator.required_text(value, key)
            elif key == 'item_type':
                value = InputValidator.choice(value, key, ITEM_TYPES)
            elif key == 'quantity_total':
                value = InputValidator.positive_int(value, key)
            elif key == 'purchase_price':
                value = InputValidator.money(value, key)
            elif key == 'purchase_date':
                value = InputValidator.timestamp(value, key)
            else:
                value = InputValidator.optional_text(value, key)
            changes[key] = value
        return changes

    def _flush_or_commit(self, commit: bool, conflict_message: str) -> None:
        try:
            if commit:
                db.session.commit()
            else:
                db.session.flush()
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Integrity error writing inventory item: {e.orig}")
            raise ConflictError(conflict_message) from e
