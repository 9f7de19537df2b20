"""Task type service — the global catalog of service capabilities."""

import logging

from app.models.task_type import TaskType
from app.services import record_store
from app.services.validation import choice, clean_text, parse_bool, parse_int, require

logger = logging.getLogger(__name__)

DEFAULT_TASK_TYPES = [
    {"name": "Car Wash", "slot_type": "per_hour", "count": 4,
     "allowed_in_hub": True, "allowed_in_garage": False},
    {"name": "General Service", "slot_type": "max_per_day", "count": 10,
     "allowed_in_hub": False, "allowed_in_garage": True},
    {"name": "Oil Change", "slot_type": "per_hour", "count": 2,
     "allowed_in_hub": True, "allowed_in_garage": True},
]


def task_dict(row):
    return record_store.to_dict(row, exclude=("updated_at",))


def _fields(data):
    require(data, ["name"])
    return {
        "name": clean_text(data.get("name")),
        "slot_type": choice(
            data.get("slot_type") or "per_hour", TaskType.SLOT_TYPES, "slot_type"
        ),
        "count": parse_int(data.get("count"), "count", default=0, minimum=0),
        "allowed_in_hub": parse_bool(data.get("allowed_in_hub"), "allowed_in_hub"),
        "allowed_in_garage": parse_bool(data.get("allowed_in_garage"), "allowed_in_garage"),
    }


def list_task_types():
    return [task_dict(row) for row in record_store.select("task_types")]


def create_task_type(data):
    row = record_store.insert("task_types", [_fields(data)])[0]
    logger.info(f"Task type created: {row.name} ({row.slot_type}, {row.count})")
    return task_dict(row)


def update_task_type(task_id, data):
    record_store.get("task_types", task_id)
    row = record_store.update("task_types", task_id, _fields(data))
    logger.info(f"Task type {task_id} updated")
    return task_dict(row)


def seed_defaults():
    """Insert the default catalog entries that are not there yet (by name)."""
    existing = {row.name for row in record_store.select("task_types")}
    missing = [t for t in DEFAULT_TASK_TYPES if t["name"] not in existing]
    if missing:
        record_store.insert("task_types", missing)
    return [t["name"] for t in missing]
