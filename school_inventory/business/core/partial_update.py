"""
Three-state fields for patch-style updates.

A field of an update struct is either UNSET (leave the column alone),
None (clear the column) or a value (write it). Keeping UNSET distinct from
None means "clear" and "don't touch" can't be confused.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, TypeVar, Union


class _Unset:
    """Marker type for a field that was not supplied"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'UNSET'


UNSET = _Unset()

T = TypeVar('T')
Patch = Union[T, None, _Unset]


def is_set(value: Any) -> bool:
    return value is not UNSET


@dataclass
class ItemUpdate:
    """Patch for an InventoryItem; every field defaults to UNSET"""

    name: Patch[str] = UNSET
    description: Patch[Optional[str]] = UNSET
    item_type: Patch[str] = UNSET
    label_code: Patch[str] = UNSET
    quantity_total: Patch[int] = UNSET
    location: Patch[Optional[str]] = UNSET
    purchase_date: Patch[Optional[datetime]] = UNSET
    purchase_price: Patch[Optional[Decimal]] = UNSET
    condition_notes: Patch[Optional[str]] = UNSET

    # Columns that must never be cleared
    REQUIRED = ('name', 'item_type', 'label_code', 'quantity_total')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ItemUpdate':
        """Keys absent from data stay UNSET; keys present with null become None"""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def provided(self) -> Dict[str, Any]:
        """Fields that were supplied, including explicit None"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if is_set(getattr(self, f.name))
        }
