"""
Database build for the School Inventory system
Creates tables and seeds the default administrator.
"""

from school_inventory import create_app, db
from school_inventory.logger import get_logger

logger = get_logger("school_inventory.build")


def build_models():
    """Import every model so it is registered with SQLAlchemy, then create missing tables"""
    import school_inventory.data.admin
    import school_inventory.data.inventory_item
    import school_inventory.data.school_user
    import school_inventory.data.borrowing_record

    db.create_all()
    logger.info("All database tables created")


def insert_critical_data():
    """
    Ensure the default administrator exists.

    Failures are logged by AdminContext and never stop start-up.
    """
    from school_inventory.business.core.admin_context import AdminContext

    admin = AdminContext.ensure_default_admin()
    if admin is None:
        logger.warning("Default admin account is not available; log in with an existing admin")
    return admin


def build_database(app=None, seed=True):
    """
    Main build entry point, run at process start.

    Args:
        app: Flask app to build against (default: a new one from create_app())
        seed (bool): Whether to seed the default administrator
    """
    app = app or create_app()

    with app.app_context():
        logger.info("Starting database build")
        build_models()
        if seed:
            insert_critical_data()
        logger.info("Database build completed successfully")

    return app


def run_overdue_sweep(app=None):
    """
    One-shot overdue sweep for cron. Missing tables are created first so a
    fresh database sweeps to zero instead of failing.

    Returns:
        int: number of records moved to overdue
    """
    from school_inventory.business.borrowing.borrowing_manager import BorrowingManager

    app = build_database(app, seed=False)

    with app.app_context():
        count = BorrowingManager().sweep_overdue()
    logger.info(f"Overdue sweep complete: {count} record(s) updated")
    return count


if __name__ == '__main__':
    build_database()
