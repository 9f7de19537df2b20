"""Booking service — carwash bookings.

Prices are computed here from (vehicle_type, package, express) on every
create and edit; a price sent by the client is ignored. The time slot is
re-validated at submission, not just when the form was rendered.

Functions commit through the record store; callers do not commit.
"""

import logging

from flask import current_app

from app.errors import NotFoundError, ValidationError
from app.models.booking import CarwashBooking
from app.services import pricing, record_store, slots
from app.services.validation import choice, clean_text, parse_bool, require, validate_phone

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    "name", "phone", "vehicle_type", "package", "date", "time", "store_id",
]

EDITABLE_FIELDS = REQUIRED_FIELDS + ["express", "status"]


def booking_dict(row):
    data = record_store.to_dict(row, exclude=("updated_at",))
    data["status"] = data["status"] or "pending"
    data["store_name"] = row.store.name if row.store else None
    return data


def _require_hub(store_id):
    try:
        store = record_store.get("stores", store_id)
    except NotFoundError:
        raise ValidationError("Choose a valid hub.", field="store_id") from None
    if store.type != "hub":
        raise ValidationError("Bookings can only be made at a hub.", field="store_id")
    return store


def quote(vehicle_type, package, express):
    total = pricing.price(vehicle_type, package, express)
    return {
        "vehicle_type": vehicle_type,
        "package": package,
        "express": express,
        "base_price": pricing.base_price(vehicle_type, package),
        "express_surcharge": pricing.EXPRESS_SURCHARGE if express else 0,
        "price": total,
    }


def create_booking(data, now=None):
    """Create a carwash booking.

    Raises:
        ValidationError: missing field, bad phone, unpriceable
            vehicle/package, unknown hub, or a slot that has passed.
        NoSlotsAvailableError: today is fully past.
    """
    require(data, REQUIRED_FIELDS)
    phone = validate_phone(data.get("phone"))
    express = parse_bool(data.get("express"), "express")
    total = pricing.price(data.get("vehicle_type"), data.get("package"), express)

    day = slots.parse_date(data.get("date"))
    slots.check_slot(slots.CARWASH_SLOTS, day, data.get("time"), now or slots.business_now())
    _require_hub(data.get("store_id"))

    row = record_store.insert("carwash", [{
        "name": clean_text(data.get("name")),
        "phone": phone,
        "vehicle_type": data.get("vehicle_type"),
        "package": data.get("package"),
        "express": express,
        "date": day.isoformat(),
        "time": data.get("time"),
        "price": total,
        "store_id": data.get("store_id"),
        "status": "pending",
        "lead_source": current_app.config["BOOKING_LEAD_SOURCE"],
    }])[0]

    logger.info(f"Carwash booking created: {row.id} ({row.date} {row.time}, Rs {row.price})")
    return booking_dict(row)


def list_bookings(status=None):
    """Bookings newest first, with per-status counts over all bookings."""
    if status not in (None, "", "all"):
        choice(status, CarwashBooking.STATUSES, "status")

    bookings = [booking_dict(row) for row in record_store.select("carwash")]
    counts = {"all": len(bookings)}
    for s in CarwashBooking.STATUSES:
        counts[s] = sum(1 for b in bookings if b["status"] == s)

    if status not in (None, "", "all"):
        bookings = [b for b in bookings if b["status"] == status]
    return {"bookings": bookings, "counts": counts}


def get_booking(booking_id):
    return booking_dict(record_store.get("carwash", booking_id))


def update_booking(booking_id, data, now=None):
    """Edit a booking. Price is always recomputed from the merged fields."""
    row = record_store.get("carwash", booking_id)
    current = booking_dict(row)

    merged = dict(current)
    for field in EDITABLE_FIELDS:
        if field in data:
            merged[field] = data[field]
    merged["express"] = parse_bool(merged.get("express"), "express")

    require(merged, REQUIRED_FIELDS)
    phone = validate_phone(merged.get("phone"))
    status = choice(merged.get("status") or "pending", CarwashBooking.STATUSES, "status")
    total = pricing.price(merged["vehicle_type"], merged["package"], merged["express"])

    day = slots.parse_date(merged.get("date"))
    if day.isoformat() != current["date"] or merged["time"] != current["time"]:
        slots.check_slot(slots.CARWASH_SLOTS, day, merged["time"], now or slots.business_now())
    if merged["store_id"] != current["store_id"]:
        _require_hub(merged["store_id"])

    row = record_store.update("carwash", booking_id, {
        "name": clean_text(merged["name"]),
        "phone": phone,
        "vehicle_type": merged["vehicle_type"],
        "package": merged["package"],
        "express": merged["express"],
        "date": day.isoformat(),
        "time": merged["time"],
        "store_id": merged["store_id"],
        "status": status,
        "price": total,
    })
    logger.info(f"Carwash booking {booking_id} updated (Rs {total}, {status})")
    return booking_dict(row)


def set_status(booking_id, status):
    choice(status, CarwashBooking.STATUSES, "status")
    row = record_store.update("carwash", booking_id, {"status": status})
    logger.info(f"Carwash booking {booking_id} status -> {status}")
    return booking_dict(row)
