from school_inventory import db
from school_inventory.data.record_base import UpdatableRecordBase

BORROWING_STATUSES = ('active', 'returned', 'overdue')


class BorrowingRecord(UpdatableRecordBase):
    """
    One loan of quantity_borrowed units of an item to a user.

    Status changes go through BorrowingStateMachine; this model holds no
    business logic.
    """

    __tablename__ = 'borrowing_records'

    item_id = db.Column(db.Integer, db.ForeignKey('inventory_items.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    quantity_borrowed = db.Column(db.Integer, nullable=False)
    borrowed_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    returned_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.Enum(*BORROWING_STATUSES, name='borrowing_status'), nullable=False, default='active', index=True)
    notes = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.CheckConstraint('quantity_borrowed >= 1', name='ck_borrowing_quantity_positive'),
    )

    item = db.relationship('InventoryItem', back_populates='borrowing_records')
    user = db.relationship('User', back_populates='borrowing_records')

    def __repr__(self):
        return f'<BorrowingRecord {self.id} Item:{self.item_id} User:{self.user_id} Qty:{self.quantity_borrowed} {self.status}>'
