"""
Tests for BorrowingStateMachine.
"""

import pytest

from school_inventory.business.borrowing.state_machine import BorrowingStateMachine
from school_inventory.business.core.errors import ValidationError


@pytest.mark.parametrize('from_status,to_status', [
    ('active', 'overdue'),
    ('active', 'returned'),
    ('overdue', 'returned'),
    ('overdue', 'active'),
])
def test_allowed_transitions(from_status, to_status):
    assert BorrowingStateMachine.can_transition(from_status, to_status)
    BorrowingStateMachine.validate_transition(from_status, to_status)


def test_returned_is_terminal():
    assert BorrowingStateMachine.get_allowed_transitions('returned') == set()
    for target in ('active', 'overdue', 'returned'):
        assert not BorrowingStateMachine.can_transition('returned', target)

    with pytest.raises(ValidationError, match="item has already been returned"):
        BorrowingStateMachine.validate_transition('returned', 'returned')


def test_unknown_transition_rejected():
    assert not BorrowingStateMachine.can_transition('active', 'active')
    with pytest.raises(ValidationError):
        BorrowingStateMachine.validate_transition('active', 'active')


def test_initial_state_is_active():
    assert BorrowingStateMachine.INITIAL_STATE == 'active'
    assert BorrowingStateMachine.get_allowed_transitions('active') == {'overdue', 'returned'}
