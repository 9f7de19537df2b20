"""Auth blueprint — /auth/*

Username + password login for back-office operators.

Route Map:
  POST /auth/login       — Log in (form or JSON)
  GET  /auth/logout      — Log out
  GET  /auth/me          — Current operator
  GET  /auth/csrf-token  — CSRF token for JSON clients
"""

import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf
from werkzeug.security import check_password_hash

from app.decorators import payload
from app.extensions import limiter
from app.models.admin_user import AdminUser

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _user_dict(user):
    return {"id": user.id, "username": user.username, "role": user.role}


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("15 per minute")
def login():
    """Check credentials against admin_users and start a session."""
    data = payload()
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    remember = bool(data.get("remember"))

    if not username or not password:
        return jsonify({"error": "Username and password are required."}), 400

    user = AdminUser.query.filter_by(username=username).first()

    if user is None or not check_password_hash(user.password_hash, password):
        logger.info(f"Failed login for username {username!r}")
        return jsonify({"error": "Invalid username or password."}), 401

    if not user.is_active:
        return jsonify({"error": "Your account has been deactivated."}), 403

    login_user(user, remember=remember)
    logger.info(f"Operator {user.username} logged in")
    return jsonify({"user": _user_dict(user)})


@auth_bp.route("/logout")
def logout():
    logout_user()
    return jsonify({"success": True})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"user": _user_dict(current_user)})


@auth_bp.route("/csrf-token")
def csrf_token():
    return jsonify({"csrf_token": generate_csrf()})
