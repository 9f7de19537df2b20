"""
Custom route decorators for access control.

- admin_required: ensures the operator is logged in AND the account is active.
"""

from functools import wraps

from flask import abort, request
from flask_login import current_user, login_required

from app.errors import ValidationError


def admin_required(f):
    """Require login + an active admin account."""

    @wraps(f)
    @login_required
    def decorated(*args, **kwargs):
        if not current_user.is_active:
            abort(403)
        return f(*args, **kwargs)

    return decorated


def payload():
    """Request body as a dict, from JSON or a regular form POST."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object.")
        return data
    return request.form.to_dict()
