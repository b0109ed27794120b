from school_inventory import db
from school_inventory.data.record_base import UpdatableRecordBase

ITEM_TYPES = ('digital_book', 'laboratory_equipment', 'furniture', 'it_asset')


class InventoryItem(UpdatableRecordBase):
    """
    A lendable school asset tracked by label code.

    quantity_available is maintained by the business layer
    (InventoryManager / BorrowingManager); the check constraints only
    guard the range.
    """

    __tablename__ = 'inventory_items'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    item_type = db.Column(db.Enum(*ITEM_TYPES, name='item_type'), nullable=False)
    label_code = db.Column(db.String(100), unique=True, nullable=False)
    quantity_total = db.Column(db.Integer, nullable=False)
    quantity_available = db.Column(db.Integer, nullable=False)
    location = db.Column(db.String(200), nullable=True)
    purchase_date = db.Column(db.DateTime, nullable=True)
    purchase_price = db.Column(db.Numeric(10, 2, asdecimal=True), nullable=True)
    condition_notes = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.CheckConstraint('quantity_total >= 1', name='ck_item_quantity_total_positive'),
        db.CheckConstraint(
            'quantity_available >= 0 AND quantity_available <= quantity_total',
            name='ck_item_quantity_available_range',
        ),
        db.CheckConstraint('purchase_price IS NULL OR purchase_price >= 0', name='ck_item_purchase_price'),
    )

    borrowing_records = db.relationship(
        'BorrowingRecord',
        back_populates='item',
        lazy='dynamic',
        passive_deletes=True,
    )

    def __repr__(self):
        return f'<InventoryItem {self.label_code}: {self.name}>'
