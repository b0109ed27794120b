from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin

from school_inventory import db, login_manager
from school_inventory.data.record_base import RecordBase


class Admin(UserMixin, RecordBase):
    """Administrator account; the only principal allowed to log in"""

    __tablename__ = 'admins'

    SERIALIZE_EXCLUDE = ('password_hash',)

    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<Admin {self.username}>'


@login_manager.user_loader
def load_admin(admin_id):
    return db.session.get(Admin, int(admin_id))
