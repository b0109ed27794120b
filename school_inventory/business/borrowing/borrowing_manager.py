from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from school_inventory import db
from school_inventory.business.borrowing.state_machine import BorrowingStateMachine
from school_inventory.business.core.errors import NotFoundError, ValidationError
from school_inventory.business.core.validators import InputValidator
from school_inventory.business.inventory.inventory_manager import InventoryManager
from school_inventory.data.borrowing_record import BorrowingRecord
from school_inventory.data.inventory_item import InventoryItem
from school_inventory.data.school_user import User
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.business.borrowing.borrowing_manager")


class BorrowingManager:
    """
    Borrow/return bookkeeping.

    Every method that touches quantities writes the item row and the
    BorrowingRecord in one transaction: both commit or both roll back.
    """

    def __init__(self, inventory_manager: Optional[InventoryManager] = None):
        self.inventory = inventory_manager or InventoryManager()

    def borrow(
        self,
        *,
        item_id: int,
        user_id: int,
        quantity: int,
        duration_days: int,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> BorrowingRecord:
        """
        Lend quantity units of an item to a user for duration_days.

        Raises:
            NotFoundError: unknown user or item
            ValidationError: bad quantity/duration, or not enough units available
        """
        item_id = InputValidator.positive_int(item_id, 'item_id')
        user_id = InputValidator.positive_int(user_id, 'user_id')
        quantity = InputValidator.positive_int(quantity, 'quantity_borrowed')
        duration_days = InputValidator.positive_int(duration_days, 'borrowing_duration_days')
        notes = InputValidator.optional_text(notes, 'notes')

        borrowed_at = now or datetime.utcnow()
        try:
            due_date = borrowed_at + timedelta(days=duration_days)
        except OverflowError:
            raise ValidationError("borrowing_duration_days is out of range")

        try:
            user = db.session.get(User, user_id)
            if user is None:
                raise NotFoundError(f"User with id {user_id} not found")

            # Row lock so two borrows can't both pass the availability check
            item = (
                db.session.query(InventoryItem)
                .filter(InventoryItem.id == item_id)
                .with_for_update()
                .first()
            )
            if item is None:
                raise NotFoundError(f"Item with id {item_id} not found")

            if quantity > item.quantity_available:
                logger.warning(
                    f"Borrow rejected for item {item.id}: requested {quantity}, "
                    f"available {item.quantity_available}"
                )
                raise ValidationError("insufficient quantity available")

            self.inventory.adjust_availability(item, -quantity)

            record = BorrowingRecord(
                item_id=item.id,
                user_id=user.id,
                quantity_borrowed=quantity,
                borrowed_date=borrowed_at,
                due_date=due_date,
                returned_date=None,
                status=BorrowingStateMachine.INITIAL_STATE,
                notes=notes,
            )
            db.session.add(record)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            f"Borrowing {record.id}: {quantity} x item {item.id} to user {user.id}, due {record.due_date.isoformat()}"
        )
        return record

    def return_item(self, record_id: int, notes: str | None = None, now: datetime | None = None) -> BorrowingRecord:
        """
        Close a loan and put its units back on the shelf.

        Accepted from active or overdue. notes replaces the record's notes.

        Raises:
            NotFoundError: unknown record
            ValidationError: record already returned
        """
        notes = InputValidator.optional_text(notes, 'notes')

        try:
            record = (
                db.session.query(BorrowingRecord)
                .filter(BorrowingRecord.id == record_id)
                .with_for_update()
                .first()
            )
            if record is None:
                raise NotFoundError("Borrowing record not found")

            BorrowingStateMachine.validate_transition(record.status, BorrowingStateMachine.RETURNED)

            item = (
                db.session.query(InventoryItem)
                .filter(InventoryItem.id == record.item_id)
                .with_for_update()
                .first()
            )
            if item is None:
                raise NotFoundError(f"Item with id {record.item_id} not found")

            returned_at = now or datetime.utcnow()
            record.status = BorrowingStateMachine.RETURNED
            record.returned_date = returned_at
            record.notes = notes
            record.updated_at = returned_at

            self.inventory.adjust_availability(item, record.quantity_borrowed)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Borrowing {record.id} returned; item {item.id} now has {item.quantity_available} available")
        return record

    def sweep_overdue(self, now: datetime | None = None) -> int:
        """
        Mark every active loan past its due date as overdue.

        One set-based UPDATE; quantities are untouched. Safe to run repeatedly.

        Returns:
            int: number of records moved to overdue
        """
        now = now or datetime.utcnow()
        try:
            count = (
                db.session.query(BorrowingRecord)
                .filter(
                    BorrowingRecord.status == BorrowingStateMachine.ACTIVE,
                    BorrowingRecord.due_date < now,
                )
                .update(
                    {
                        BorrowingRecord.status: BorrowingStateMachine.OVERDUE,
                        BorrowingRecord.updated_at: now,
                    },
                    synchronize_session='fetch',
                )
            )
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.error("Overdue sweep failed", exc_info=True)
            raise

        if count:
            logger.info(f"Overdue sweep moved {count} borrowing record(s) to overdue")
        else:
            logger.debug("Overdue sweep found nothing to update")
        return count
