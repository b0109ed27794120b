from datetime import datetime

from school_inventory import db
from school_inventory.business.core.data_insertion_mixin import DataInsertionMixin


class RecordBase(db.Model, DataInsertionMixin):
    """Abstract base class for every stored entity"""

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)


class UpdatableRecordBase(RecordBase):
    """Abstract base for entities that track their last modification"""

    __abstract__ = True

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
