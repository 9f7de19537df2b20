"""Input helpers shared by the dashboard services.

Everything here raises ValidationError with a message meant for the
operator; nothing falls back to a default for a bad value.
"""

import re

import bleach

from app.errors import ValidationError

PHONE_RE = re.compile(r"^\d{10}$")


def clean_text(value):
    """Strip all HTML tags and surrounding whitespace from user input."""
    if value is None:
        return None
    return bleach.clean(str(value), tags=[], strip=True).strip()


def require(data, fields):
    """Raise on the first required field that is missing or blank."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("Please fill all required fields.", field=field)


def validate_phone(value, field="phone", label="phone number"):
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Enter a valid 10-digit {label}.", field=field)
    value = (value or "").strip()
    if not PHONE_RE.match(value):
        raise ValidationError(f"Enter a valid 10-digit {label}.", field=field)
    return value


TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("", "0", "false", "no", "off")


def parse_bool(value, field=None):
    """Parse a checkbox/JSON flag. Missing means False; anything unknown raises."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, str)):
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
    raise ValidationError(f"{field or 'Value'} must be true or false.", field=field)


def parse_int(value, field, default=None, minimum=None):
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number.", field=field) from None
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}.", field=field)
    return number


def parse_float(value, field, default=None):
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number.", field=field) from None


def choice(value, options, field, label=None):
    """Return `value` if it is one of `options`, else raise."""
    if not isinstance(value, str) or value not in options:
        raise ValidationError(
            f"Invalid {label or field} '{value}'. Must be one of: {', '.join(options)}",
            field=field,
        )
    return value
