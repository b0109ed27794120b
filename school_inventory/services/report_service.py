"""
Report Service
Dashboard statistics and per-item usage report.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import distinct, func, select

from school_inventory import db
from school_inventory.data.borrowing_record import BorrowingRecord
from school_inventory.data.inventory_item import InventoryItem


@dataclass
class DashboardStats:
    total_items: int
    total_borrowed: int
    overdue_items: int
    available_items: int
    active_borrowers: int

    def to_dict(self) -> Dict:
        return {
            'total_items': self.total_items,
            'total_borrowed': self.total_borrowed,
            'overdue_items': self.overdue_items,
            'available_items': self.available_items,
            'active_borrowers': self.active_borrowers,
        }


@dataclass
class ItemUsageReport:
    item_id: int
    item_name: str
    label_code: str
    total_borrows: int
    current_borrowed: int
    last_borrowed_date: Optional[datetime] = None

    def to_dict(self) -> Dict:
        return {
            'item_id': self.item_id,
            'item_name': self.item_name,
            'label_code': self.label_code,
            'total_borrows': self.total_borrows,
            'current_borrowed': self.current_borrowed,
            'last_borrowed_date': self.last_borrowed_date.isoformat() if self.last_borrowed_date else None,
        }


class ReportService:

    @staticmethod
    def dashboard_stats(now: Optional[datetime] = None) -> DashboardStats:
        """
        Headline numbers for the dashboard.

        All five aggregates come from a single SELECT so they describe the
        same snapshot. total_borrowed, overdue_items and active_borrowers look
        at status 'active' only; overdue_items counts active loans already
        past due that the sweep has not moved yet.
        """
        now = now or datetime.utcnow()
        active = BorrowingRecord.status == 'active'

        total_items = select(func.count(InventoryItem.id)).scalar_subquery()
        available_items = select(func.coalesce(func.sum(InventoryItem.quantity_available), 0)).scalar_subquery()
        total_borrowed = (
            select(func.coalesce(func.sum(BorrowingRecord.quantity_borrowed), 0))
            .where(active)
            .scalar_subquery()
        )
        overdue_items = (
            select(func.count(BorrowingRecord.id))
            .where(active, BorrowingRecord.due_date < now)
            .scalar_subquery()
        )
        active_borrowers = (
            select(func.count(distinct(BorrowingRecord.user_id)))
            .where(active)
            .scalar_subquery()
        )

        row = db.session.execute(
            select(total_items, total_borrowed, overdue_items, available_items, active_borrowers)
        ).one()

        return DashboardStats(
            total_items=int(row[0] or 0),
            total_borrowed=int(row[1] or 0),
            overdue_items=int(row[2] or 0),
            available_items=int(row[3] or 0),
            active_borrowers=int(row[4] or 0),
        )

    @staticmethod
    def usage_report() -> List[ItemUsageReport]:
        """One row per item, most borrowed first (ties by item id)"""
        total_borrows = func.count(BorrowingRecord.id)
        rows = (
            db.session.query(
                InventoryItem.id,
                InventoryItem.name,
                InventoryItem.label_code,
                InventoryItem.quantity_total,
                InventoryItem.quantity_available,
                total_borrows.label('total_borrows'),
                func.max(BorrowingRecord.borrowed_date).label('last_borrowed_date'),
            )
            .outerjoin(BorrowingRecord, BorrowingRecord.item_id == InventoryItem.id)
            .group_by(
                InventoryItem.id,
                InventoryItem.name,
                InventoryItem.label_code,
                InventoryItem.quantity_total,
                InventoryItem.quantity_available,
            )
            .order_by(total_borrows.desc(), InventoryItem.id)
            .all()
        )

        return [
            ItemUsageReport(
                item_id=row.id,
                item_name=row.name,
                label_code=row.label_code,
                total_borrows=int(row.total_borrows),
                current_borrowed=row.quantity_total - row.quantity_available,
                last_borrowed_date=row.last_borrowed_date,
            )
            for row in rows
        ]
