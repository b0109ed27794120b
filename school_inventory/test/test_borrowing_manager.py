"""
Tests for the borrow/return lifecycle and the overdue sweep.
"""

from datetime import datetime, timedelta

import pytest

from conftest import outstanding_sum
from school_inventory import db
from school_inventory.business.borrowing.borrowing_manager import BorrowingManager
from school_inventory.business.core.errors import NotFoundError, ValidationError
from school_inventory.business.inventory.inventory_manager import InventoryManager
from school_inventory.data.borrowing_record import BorrowingRecord
from school_inventory.data.inventory_item import InventoryItem


def test_borrow_and_return_restores_availability(make_item, make_user):
    item = make_item(quantity_total=10)
    user = make_user()
    manager = BorrowingManager()
    borrowed_at = datetime(2025, 3, 1, 9, 30)

    record = manager.borrow(
        item_id=item.id, user_id=user.id, quantity=4, duration_days=7,
        notes='For chemistry lab', now=borrowed_at,
    )

    assert record.status == 'active'
    assert record.quantity_borrowed == 4
    assert record.borrowed_date == borrowed_at
    assert record.due_date == borrowed_at + timedelta(days=7)
    assert record.returned_date is None
    assert record.notes == 'For chemistry lab'
    assert db.session.get(InventoryItem, item.id).quantity_available == 6

    returned = manager.return_item(record.id, notes='Returned in good shape')

    assert returned.status == 'returned'
    assert returned.returned_date is not None
    assert returned.notes == 'Returned in good shape'
    assert db.session.get(InventoryItem, item.id).quantity_available == 10


def test_borrow_rejects_insufficient_quantity(make_item, make_user):
    item = make_item(quantity_total=3)
    user = make_user()

    with pytest.raises(ValidationError, match="insufficient quantity available"):
        BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=4, duration_days=7)

    assert db.session.get(InventoryItem, item.id).quantity_available == 3
    assert BorrowingRecord.query.count() == 0


def test_borrow_can_take_every_unit(make_item, make_user):
    item = make_item(quantity_total=2)
    user = make_user()

    BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=2, duration_days=1)
    assert db.session.get(InventoryItem, item.id).quantity_available == 0

    with pytest.raises(ValidationError):
        BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=1, duration_days=1)


def test_borrow_unknown_item_or_user(make_item, make_user):
    item = make_item()
    user = make_user()

    with pytest.raises(NotFoundError):
        BorrowingManager().borrow(item_id=999, user_id=user.id, quantity=1, duration_days=1)
    with pytest.raises(NotFoundError):
        BorrowingManager().borrow(item_id=item.id, user_id=999, quantity=1, duration_days=1)

    assert BorrowingRecord.query.count() == 0


@pytest.mark.parametrize('quantity,duration', [(0, 7), (-1, 7), (1, 0), (None, 7), (1, True)])
def test_borrow_rejects_non_positive_values(make_item, make_user, quantity, duration):
    item = make_item()
    user = make_user()

    with pytest.raises(ValidationError):
        BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=quantity, duration_days=duration)


def test_double_return_is_rejected(make_item, make_user):
    item = make_item(quantity_total=5)
    user = make_user()
    manager = BorrowingManager()
    record = manager.borrow(item_id=item.id, user_id=user.id, quantity=2, duration_days=7)
    manager.return_item(record.id)

    with pytest.raises(ValidationError, match="item has already been returned"):
        manager.return_item(record.id)

    assert db.session.get(InventoryItem, item.id).quantity_available == 5, "Second return must not add units"


def test_return_unknown_record(app):
    with pytest.raises(NotFoundError, match="Borrowing record not found"):
        BorrowingManager().return_item(4242)


def test_overdue_record_can_be_returned(make_item, make_user):
    item = make_item(quantity_total=5)
    user = make_user()
    manager = BorrowingManager()
    record = manager.borrow(
        item_id=item.id, user_id=user.id, quantity=3, duration_days=1,
        now=datetime.utcnow() - timedelta(days=10),
    )
    manager.sweep_overdue()
    assert db.session.get(BorrowingRecord, record.id).status == 'overdue'

    manager.return_item(record.id)

    assert db.session.get(BorrowingRecord, record.id).status == 'returned'
    assert db.session.get(InventoryItem, item.id).quantity_available == 5


class _FailingInventoryManager(InventoryManager):
    """Applies the quantity change, then fails before the commit"""

    def adjust_availability(self, item, delta):
        super().adjust_availability(item, delta)
        raise RuntimeError("storage unavailable")


def test_failed_borrow_rolls_back_both_writes(make_item, make_user):
    item = make_item(quantity_total=10)
    user = make_user()

    with pytest.raises(RuntimeError):
        BorrowingManager(_FailingInventoryManager()).borrow(
            item_id=item.id, user_id=user.id, quantity=4, duration_days=7,
        )

    assert db.session.get(InventoryItem, item.id).quantity_available == 10
    assert BorrowingRecord.query.count() == 0


def test_failed_return_rolls_back_both_writes(make_item, make_user):
    item = make_item(quantity_total=10)
    user = make_user()
    record = BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=4, duration_days=7)

    with pytest.raises(RuntimeError):
        BorrowingManager(_FailingInventoryManager()).return_item(record.id)

    assert db.session.get(BorrowingRecord, record.id).status == 'active'
    assert db.session.get(BorrowingRecord, record.id).returned_date is None
    assert db.session.get(InventoryItem, item.id).quantity_available == 6


def test_sweep_marks_lapsed_loans_once(make_item, make_user):
    item = make_item(quantity_total=10)
    user = make_user()
    manager = BorrowingManager()
    now = datetime.utcnow()

    lapsed = manager.borrow(
        item_id=item.id, user_id=user.id, quantity=1, duration_days=2, now=now - timedelta(days=5),
    )
    current = manager.borrow(item_id=item.id, user_id=user.id, quantity=1, duration_days=7, now=now)
    returned = manager.borrow(
        item_id=item.id, user_id=user.id, quantity=1, duration_days=1, now=now - timedelta(days=5),
    )
    manager.return_item(returned.id)

    assert manager.sweep_overdue(now=now) == 1
    assert manager.sweep_overdue(now=now) == 0, "Sweep is idempotent"

    assert db.session.get(BorrowingRecord, lapsed.id).status == 'overdue'
    assert db.session.get(BorrowingRecord, current.id).status == 'active'
    assert db.session.get(BorrowingRecord, returned.id).status == 'returned'

    # The sweep never touches quantities
    assert db.session.get(InventoryItem, item.id).quantity_available == 8


def test_sweep_with_nothing_due(app):
    assert BorrowingManager().sweep_overdue() == 0


def test_availability_matches_outstanding_loans(make_item, make_user):
    item = make_item(quantity_total=12)
    alice = make_user()
    bob = make_user(role='teacher', student_id=None, department='Science')
    manager = BorrowingManager()

    first = manager.borrow(item_id=item.id, user_id=alice.id, quantity=3, duration_days=7)
    manager.borrow(
        item_id=item.id, user_id=bob.id, quantity=5, duration_days=1,
        now=datetime.utcnow() - timedelta(days=4),
    )
    manager.sweep_overdue()
    manager.return_item(first.id)
    manager.borrow(item_id=item.id, user_id=alice.id, quantity=2, duration_days=3)

    db_item = db.session.get(InventoryItem, item.id)
    assert outstanding_sum(item.id) == 7
    assert db_item.quantity_total - db_item.quantity_available == outstanding_sum(item.id)
    assert db_item.quantity_available == 5


def test_borrow_rejects_duration_past_calendar_range(make_item, make_user):
    item = make_item(quantity_total=5)
    user = make_user()

    with pytest.raises(ValidationError, match="borrowing_duration_days is out of range"):
        BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=1, duration_days=5_000_000)

    assert db.session.get(InventoryItem, item.id).quantity_available == 5
    assert BorrowingRecord.query.count() == 0


def test_record_serializes_columns_only(make_item, make_user):
    item = make_item()
    user = make_user()
    record = BorrowingManager().borrow(item_id=item.id, user_id=user.id, quantity=1, duration_days=2)

    assert set(record.to_dict()) == {column.key for column in BorrowingRecord.__table__.columns}
