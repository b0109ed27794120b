"""
State machine for the BorrowingRecord lifecycle

Encodes valid status transitions. Keeps "what is allowed" separate from
"how persistence occurs" (BorrowingManager).
"""

from typing import Dict, Set

from school_inventory.business.core.errors import ValidationError


class BorrowingStateMachine:
    """
    active -> overdue   (sweep, once due_date has passed)
    overdue -> active   (reserved for due-date extension; no operation uses it yet)
    active/overdue -> returned

    returned is terminal.
    """

    ACTIVE = 'active'
    OVERDUE = 'overdue'
    RETURNED = 'returned'

    INITIAL_STATE = ACTIVE
    TERMINAL_STATES = {RETURNED}

    TRANSITIONS: Dict[str, Set[str]] = {
        ACTIVE: {OVERDUE, RETURNED},
        OVERDUE: {ACTIVE, RETURNED},
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        if from_status in cls.TERMINAL_STATES:
            return False
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """
        Raises:
            ValidationError: If the transition is not allowed
        """
        if cls.can_transition(from_status, to_status):
            return
        if from_status == cls.RETURNED:
            raise ValidationError("item has already been returned")
        raise ValidationError(f"Invalid borrowing status transition: {from_status} → {to_status}")

    @classmethod
    def get_allowed_transitions(cls, from_status: str) -> Set[str]:
        if from_status in cls.TERMINAL_STATES:
            return set()
        return cls.TRANSITIONS.get(from_status, set())
