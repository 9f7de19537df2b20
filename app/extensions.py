"""
Deferred extension instances.

Created here, bound to the app in create_app() via init_app().
"""

from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],  # No global limit; login is limited per route
    storage_uri="memory://",
)


@login_manager.user_loader
def load_user(user_id):
    """Load admin user by ID from session. Imports lazily to avoid circular deps."""
    from app.models.admin_user import AdminUser

    return db.session.get(AdminUser, user_id)


@login_manager.unauthorized_handler
def unauthorized():
    """JSON dashboard: answer 401 instead of redirecting to a login page."""
    return jsonify({"error": "Login required.", "code": "unauthorized"}), 401
