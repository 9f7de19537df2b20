import os
import logging

import click
from flask import Flask, jsonify
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException
from werkzeug.security import generate_password_hash

from app.config import config_by_name
from app.errors import DashboardError
from app.extensions import db, migrate, login_manager, csrf, limiter

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from app import models  # noqa: F401

    # --- Register blueprints ---
    from app.blueprints.auth import auth_bp
    from app.blueprints.dashboard import dashboard_bp
    from app.blueprints.leads import leads_bp
    from app.blueprints.bookings import bookings_bp
    from app.blueprints.customers import customers_bp
    from app.blueprints.stores import stores_bp
    from app.blueprints.tasks import tasks_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(stores_bp)
    app.register_blueprint(tasks_bp)

    # --- Root route ---
    @app.route("/")
    def index():
        """Entry points of the back-office API."""
        return jsonify({
            "name": "Vehicle service back office",
            "login": "/auth/login",
            "summary": "/admin/api/summary",
            "leads": "/admin/leads/api/leads",
            "bookings": "/admin/bookings/api/carwash",
            "customers": "/admin/customers/api/customers",
            "stores": "/admin/stores/api/stores",
            "task_types": "/admin/tasks/api/task-types",
        })

    register_error_handlers(app)

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Control referrer information
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Prevent XSS (legacy but still useful)
        response.headers["X-XSS-Protection"] = "1; mode=block"
        # Permissions Policy (restrict browser features)
        response.headers["Permissions-Policy"] = (
            "camera=(), microphone=(), geolocation=(self), payment=()"
        )
        # Content Security Policy
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data:; "
            "connect-src 'self'; "
            "base-uri 'self'; "
            "form-action 'self'; "
            "frame-ancestors 'none';"
        )
        # Strict Transport Security (only in production)
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_error_handlers(app):
    """Render every failure as JSON the dashboard can show."""

    @app.errorhandler(DashboardError)
    def dashboard_error(e):
        if e.status_code >= 500:
            logger.error(f"{type(e).__name__}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(CSRFError)
    def csrf_error(e):
        return jsonify({"error": e.description, "code": "csrf_error"}), 400

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({
            "error": e.description,
            "code": (e.name or "error").lower().replace(" ", "_"),
        }), e.code

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Something went wrong.", "code": "server_error"}), 500


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("seed-admin")
    @click.option("--username", default="admin", help="Admin username")
    @click.option("--password", default="admin123", help="Admin password")
    @click.option("--role", default="admin", help="Role (admin, manager, agent)")
    def seed_admin(username, password, role):
        """Create a back-office operator account.

        Usage:
            flask seed-admin
            flask seed-admin --username ops --password s3cret --role manager
        """
        from app.models.admin_user import AdminUser

        if role not in AdminUser.ROLES:
            click.echo(f"Unknown role '{role}'. Use one of: {', '.join(AdminUser.ROLES)}")
            return

        existing = AdminUser.query.filter_by(username=username).first()
        if existing:
            click.echo(f"Admin user already exists: {username}")
            return

        db.session.add(AdminUser(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        ))
        db.session.commit()
        click.echo(f"Created admin user: {username} ({role})")

    @app.cli.command("seed-task-types")
    def seed_task_types():
        """Insert the default task type catalog (skips names that exist)."""
        from app.services.task_service import seed_defaults

        added = seed_defaults()
        if added:
            click.echo(f"Added task types: {', '.join(added)}")
        else:
            click.echo("Task types already seeded.")
