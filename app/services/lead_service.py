"""Lead service — intake and the status transition engine.

transition() is the only way a lead's status changes. It writes
{status, remark} to the record store first and hands back the updated
lead only after the write is confirmed, so callers never show a change
the database refused.
"""

import logging

from flask import current_app

from app.errors import ValidationError
from app.services import pipeline, record_store, slots
from app.services.validation import choice, clean_text, require, validate_phone

logger = logging.getLogger(__name__)

ISSUES = [
    "General Service",
    "Car Washing",
    "Electrical Work",
    "Free Check Up",
    "Accident Repair",
    "Tyre & Brake Issue",
    "Battery Problem",
    "Engine Diagnostics",
    "Other",
]

VEHICLES = ["Bike", "Car", "Auto", "Truck"]


def lead_dict(row):
    return record_store.to_dict(row, exclude=("updated_at",))


def list_leads():
    """All leads, newest first, as plain dicts."""
    return [lead_dict(row) for row in record_store.select("leads")]


def get_lead(lead_id):
    return lead_dict(record_store.get("leads", lead_id))


def create_lead(data, now=None):
    """Create a lead from the intake form.

    Status is always "new" and the remark starts empty; city and source
    come from configuration, whatever the form sent.

    Raises:
        ValidationError: missing field, bad phone, unknown vehicle/issue,
            or a same-day slot that has already started.
    """
    require(data, ["name", "phone", "vehicle", "issue", "date", "time"])
    phone = validate_phone(data.get("phone"))
    vehicle = choice(data.get("vehicle"), VEHICLES, "vehicle")
    issue = choice(data.get("issue"), ISSUES, "issue")

    day = slots.parse_date(data.get("date"))
    time_label = data.get("time")
    slots.check_slot(slots.LEAD_SLOTS, day, time_label, now or slots.business_now())

    config = current_app.config
    row = record_store.insert("leads", [{
        "name": clean_text(data.get("name")),
        "phone": phone,
        "city": config["LEAD_DEFAULT_CITY"],
        "vehicle": vehicle,
        "issue": issue,
        "date": day.isoformat(),
        "time": time_label,
        "source": config["LEAD_DEFAULT_SOURCE"],
        "remark": "",
        "status": "new",
    }])[0]

    logger.info(f"Lead created: {row.id} ({row.name})")
    return lead_dict(row)


def transition(lead, new_status, remark):
    """Move `lead` to `new_status` with an explicitly chosen `remark`.

    Any stage may follow any other. `remark` may be "" but never None:
    the caller has to pick it, even if that means carrying the current
    one forward.

    Args:
        lead: the lead as a dict (must contain "id").
        new_status: one of pipeline.STATUS_ORDER.
        remark: the remark to store with the change.

    Returns:
        A new dict equal to `lead` with status and remark replaced.

    Raises:
        ValidationError: unknown status or no remark chosen.
        NotFoundError: the lead no longer exists.
        PersistenceError: the write failed; nothing changed.
    """
    choice(new_status, pipeline.STATUS_ORDER, "status")
    if remark is None:
        raise ValidationError(
            "Choose a remark for this status change.", field="remark"
        )
    if not isinstance(remark, str):
        raise ValidationError("Remark must be text.", field="remark")
    remark = clean_text(remark)

    record_store.update("leads", lead["id"], {
        "status": new_status,
        "remark": remark,
    })

    logger.info(
        f"Lead {lead['id']} moved {lead.get('status')} -> {new_status} "
        f"(remark: {remark!r})"
    )
    return {**lead, "status": new_status, "remark": remark}
