"""
Pytest configuration and fixtures
Every test gets a fresh app over an in-memory SQLite database.
"""
import os
import tempfile

# Keep test log files out of the working tree; must be set before the logger is built
os.environ.setdefault('SCHOOL_INVENTORY_LOG_DIR', tempfile.mkdtemp(prefix='school_inventory_logs_'))

import pytest  # noqa: E402

from school_inventory import create_app  # noqa: E402
from school_inventory import db as _db  # noqa: E402

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin123456789'

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'WTF_CSRF_ENABLED': False,
    'RATELIMIT_ENABLED': False,
    'SESSION_COOKIE_SECURE': False,
    'DEFAULT_ADMIN_USERNAME': ADMIN_USERNAME,
    'DEFAULT_ADMIN_EMAIL': 'admin@school.edu',
    'DEFAULT_ADMIN_PASSWORD': ADMIN_PASSWORD,
}


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing"""
    app = create_app(dict(TEST_CONFIG))

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Test client logged in as the seeded default admin"""
    from school_inventory.business.core.admin_context import AdminContext

    AdminContext.ensure_default_admin()
    response = login_user(client)
    assert response.status_code == 200
    assert response.get_json() is not None
    return client


def login_user(client, username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
    """Helper function to login an admin"""
    return client.post('/api/login', json={
        'username': username,
        'password': password
    })


@pytest.fixture
def make_item(app):
    """Factory for inventory items; label codes are unique per call"""
    from school_inventory.business.inventory.inventory_manager import InventoryManager

    counter = {'n': 0}

    def _make_item(**overrides):
        counter['n'] += 1
        data = {
            'name': f"Item {counter['n']}",
            'description': None,
            'item_type': 'laboratory_equipment',
            'label_code': f"LAB-{counter['n']:03d}",
            'quantity_total': 10,
            'location': 'Room 101',
            'purchase_date': None,
            'purchase_price': None,
            'condition_notes': None,
        }
        data.update(overrides)
        return InventoryManager().create(data)

    return _make_item


@pytest.fixture
def make_user(app):
    """Factory for borrowers"""
    from school_inventory.business.core.user_manager import UserManager

    counter = {'n': 0}

    def _make_user(**overrides):
        counter['n'] += 1
        data = {
            'name': f"Student {counter['n']}",
            'email': f"student{counter['n']}@school.edu",
            'role': 'student',
            'student_id': f"S{counter['n']:04d}",
            'department': None,
        }
        data.update(overrides)
        return UserManager.create(data)

    return _make_user


def outstanding_sum(item_id):
    """Σ quantity_borrowed over the item's active and overdue records"""
    from school_inventory.data.borrowing_record import BorrowingRecord

    records = BorrowingRecord.query.filter(
        BorrowingRecord.item_id == item_id,
        BorrowingRecord.status.in_(('active', 'overdue')),
    ).all()
    return sum(r.quantity_borrowed for r in records)
