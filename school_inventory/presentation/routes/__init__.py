"""
Routes package for the School Inventory system
One JSON blueprint per resource, all mounted under /api
"""

from school_inventory.logger import get_logger

logger = get_logger("school_inventory.routes")


def init_app(app):
    """Register the API blueprint with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')
