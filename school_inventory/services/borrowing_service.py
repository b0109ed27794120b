"""
Borrowing Service
Read-only queries over BorrowingRecord, including the overdue listing.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from school_inventory import db
from school_inventory.data.borrowing_record import BorrowingRecord
from school_inventory.data.inventory_item import InventoryItem
from school_inventory.data.school_user import User


@dataclass
class OverdueItem:
    """One overdue loan with the display fields of its item and borrower"""
    borrowing_record_id: int
    item_name: str
    label_code: str
    user_name: str
    user_email: str
    borrowed_date: datetime
    due_date: datetime
    days_overdue: int

    def to_dict(self) -> Dict:
        return {
            'borrowing_record_id': self.borrowing_record_id,
            'item_name': self.item_name,
            'label_code': self.label_code,
            'user_name': self.user_name,
            'user_email': self.user_email,
            'borrowed_date': self.borrowed_date.isoformat(),
            'due_date': self.due_date.isoformat(),
            'days_overdue': self.days_overdue,
        }


class BorrowingService:

    @staticmethod
    def list_records() -> List[BorrowingRecord]:
        """All records, newest first"""
        return BorrowingRecord.query.order_by(BorrowingRecord.created_at.desc(), BorrowingRecord.id.desc()).all()

    @staticmethod
    def active_borrowings() -> List[BorrowingRecord]:
        """Loans not yet returned (active or overdue)"""
        return (
            BorrowingRecord.query
            .filter(BorrowingRecord.status.in_(('active', 'overdue')))
            .order_by(BorrowingRecord.id)
            .all()
        )

    @staticmethod
    def overdue_items(now: Optional[datetime] = None) -> List[OverdueItem]:
        """
        Records whose status is exactly 'overdue'.

        days_overdue is whole days since due_date, computed at query time
        so it keeps growing between sweeps.
        """
        now = now or datetime.utcnow()
        rows = (
            db.session.query(
                BorrowingRecord.id,
                InventoryItem.name,
                InventoryItem.label_code,
                User.name,
                User.email,
                BorrowingRecord.borrowed_date,
                BorrowingRecord.due_date,
            )
            .join(InventoryItem, BorrowingRecord.item_id == InventoryItem.id)
            .join(User, BorrowingRecord.user_id == User.id)
            .filter(BorrowingRecord.status == 'overdue')
            .order_by(BorrowingRecord.due_date, BorrowingRecord.id)
            .all()
        )
        return [
            OverdueItem(
                borrowing_record_id=record_id,
                item_name=item_name,
                label_code=label_code,
                user_name=user_name,
                user_email=user_email,
                borrowed_date=borrowed_date,
                due_date=due_date,
                days_overdue=(now - due_date).days,
            )
            for record_id, item_name, label_code, user_name, user_email, borrowed_date, due_date in rows
        ]
