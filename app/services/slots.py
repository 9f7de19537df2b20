"""Slot availability — which labelled time slots can still be booked.

For any date other than today every slot is open. For today a slot is
open only if its start time is strictly later than the current time in
the business timezone. Availability is recomputed on date changes and
checked again at submission, since a form can sit idle past a slot.
"""

import re
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from flask import current_app

from app.errors import NoSlotsAvailableError, ValidationError

CARWASH_SLOTS = (
    "09:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
    "02:00 PM", "03:00 PM", "04:00 PM", "05:00 PM",
)

# Lead intake uses one-hour ranges; availability goes by the range start.
LEAD_SLOTS = (
    "09:00 AM - 10:00 AM",
    "10:00 AM - 11:00 AM",
    "11:00 AM - 12:00 PM",
    "12:00 PM - 01:00 PM",
    "01:00 PM - 02:00 PM",
    "02:00 PM - 03:00 PM",
    "03:00 PM - 04:00 PM",
    "04:00 PM - 05:00 PM",
    "05:00 PM - 06:00 PM",
    "06:00 PM - 07:00 PM",
)

_SLOT_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\b")


def parse_slot(label):
    """Parse the (start of a) 12-hour slot label into a 24-hour time.

    "12:00 PM" stays hour 12 and "12:00 AM" becomes hour 0.
    """
    match = _SLOT_RE.match(label) if isinstance(label, str) else None
    if not match:
        raise ValidationError(f"Unrecognised time slot '{label}'.", field="time")

    hours, minutes = int(match.group(1)), int(match.group(2))
    meridiem = match.group(3).upper()
    if not 1 <= hours <= 12 or minutes > 59:
        raise ValidationError(f"Unrecognised time slot '{label}'.", field="time")

    if meridiem == "PM" and hours < 12:
        hours += 12
    if meridiem == "AM" and hours == 12:
        hours = 0
    return time(hours, minutes)


def parse_date(value, field="date"):
    if isinstance(value, date):
        return value
    if value is not None and not isinstance(value, str):
        raise ValidationError("Enter a valid date (YYYY-MM-DD).", field=field)
    try:
        return date.fromisoformat((value or "").strip())
    except ValueError:
        raise ValidationError("Enter a valid date (YYYY-MM-DD).", field=field) from None


def current_time(tz_name):
    return datetime.now(ZoneInfo(tz_name))


def business_now():
    """Wall-clock time in the configured business timezone."""
    return current_time(current_app.config["BUSINESS_TIMEZONE"])


def available_slots(slots, day, now):
    """Slots from `slots` (in order) that can be booked on `day`."""
    if day != now.date():
        return list(slots)
    current = now.time().replace(tzinfo=None)
    return [label for label in slots if parse_slot(label) > current]


def reconcile_selection(selected, available):
    """Keep the selected slot only while it is still available."""
    return selected if selected in available else ""


def slot_state(slots, day, now, selected=""):
    """Everything a date picker needs after the date changes."""
    available = available_slots(slots, day, now)
    return {
        "date": day.isoformat(),
        "available": available,
        "selected": reconcile_selection(selected, available),
        "exhausted": day == now.date() and not available,
    }


def check_slot(slots, day, label, now):
    """Submission-time check for a (day, slot) pair.

    Raises:
        ValidationError: unknown slot, past date, or a slot already started.
        NoSlotsAvailableError: every slot for today has passed.
    """
    if label not in slots:
        raise ValidationError("Choose a time slot from the list.", field="time")
    if day < now.date():
        raise ValidationError("Cannot book for a date in the past.", field="date")

    available = available_slots(slots, day, now)
    if not available:
        raise NoSlotsAvailableError(
            "All time slots for today have passed. Please choose another date.",
            field="date",
        )
    if label not in available:
        raise ValidationError(
            "Cannot book for a time slot that has already passed.", field="time"
        )
