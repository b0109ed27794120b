"""
Tests for the three-state ItemUpdate patch.
"""

from decimal import Decimal

from school_inventory.business.core.partial_update import UNSET, ItemUpdate, is_set


def test_unset_is_a_falsy_singleton():
    assert not UNSET
    assert type(UNSET)() is UNSET
    assert repr(UNSET) == 'UNSET'
    assert not is_set(UNSET)
    assert is_set(None), "None means 'clear', which is a supplied value"


def test_defaults_leave_everything_untouched():
    assert ItemUpdate().provided() == {}


def test_from_dict_distinguishes_absent_null_and_value():
    patch = ItemUpdate.from_dict({'name': 'Microscope', 'description': None})

    assert patch.provided() == {'name': 'Microscope', 'description': None}
    assert patch.location is UNSET
    assert patch.quantity_total is UNSET


def test_from_dict_ignores_unknown_keys():
    patch = ItemUpdate.from_dict({'quantity_available': 99, 'id': 3, 'purchase_price': Decimal('1.50')})
    assert patch.provided() == {'purchase_price': Decimal('1.50')}
