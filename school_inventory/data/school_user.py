from school_inventory import db
from school_inventory.data.record_base import RecordBase

USER_ROLES = ('admin', 'teacher', 'student')


class User(RecordBase):
    """
    A borrower: student or teacher (or staff admin) recorded by the school.

    Users never log in; administrators act on their behalf. Rows are not
    updated or deleted once created.
    """

    __tablename__ = 'users'

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    role = db.Column(db.Enum(*USER_ROLES, name='user_role'), nullable=False)
    student_id = db.Column(db.String(50), nullable=True)
    department = db.Column(db.String(100), nullable=True)

    borrowing_records = db.relationship('BorrowingRecord', back_populates='user', lazy='dynamic')

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
