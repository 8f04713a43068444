"""
Flask route blueprints for PrintOrderMail.

- main: Landing page and order form
- order: Order submission (POST /send)
- api: AJAX endpoints (price preview)

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .order import order_bp
from .api import api_bp

__all__ = [
    "main_bp",
    "order_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(api_bp)
