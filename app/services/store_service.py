"""Store service — hubs, garages, task capacities and hub tags.

Creating a store writes the store, its task capacities and (for
garages) its hub tags in one transaction. Deleting a store removes its
capacities and tags in the same transaction.
"""

import logging

from flask import current_app

from app.errors import NotFoundError, ValidationError
from app.models.store import Store
from app.services import record_store
from app.services.validation import choice, clean_text, parse_float, parse_int, require

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ["name", "city", "address", "lat", "lng", "manager_name", "manager_number"]


def store_dict(row, with_links=False):
    data = record_store.to_dict(row, exclude=("updated_at",))
    if with_links:
        data["capacities"] = [
            {
                "task_type_id": c.task_type_id,
                "task_name": c.task_type.name if c.task_type else None,
                "capacity": c.capacity,
            }
            for c in record_store.select(
                "store_task_capacities", order_by_created=False, store_id=row.id
            )
        ]
        data["hub_ids"] = [
            tag.hub_id
            for tag in record_store.select(
                "garage_hub_tags", order_by_created=False, garage_id=row.id
            )
        ]
    return data


def prefixed_name(name):
    prefix = current_app.config["STORE_NAME_PREFIX"]
    name = clean_text(name) or ""
    return name if name.startswith(prefix) else f"{prefix}{name}"


def _scalar_fields(data):
    return {
        "city": clean_text(data.get("city")) or None,
        "address": clean_text(data.get("address")) or None,
        "lat": parse_float(data.get("lat"), "lat"),
        "lng": parse_float(data.get("lng"), "lng"),
        "manager_name": clean_text(data.get("manager_name")) or None,
        "manager_number": clean_text(data.get("manager_number")) or None,
    }


def create_store(data, capacities=None, hub_ids=()):
    """Create a hub or garage with its task capacities and hub tags.

    Args:
        data: store fields (name, type, city, address, lat, lng, manager_*).
        capacities: optional {task_type_id: capacity} overrides. Tasks not
            listed get their default count. Only task types allowed for the
            store's type are granted.
        hub_ids: hubs a garage is tagged to. Ignored for hubs.

    Raises:
        ValidationError: bad type, name, capacity or hub reference.
        PersistenceError: the write failed; nothing was saved.
    """
    require(data, ["name", "type"])
    store_type = choice(data.get("type"), Store.TYPES, "type")
    name = prefixed_name(data.get("name"))
    if name == current_app.config["STORE_NAME_PREFIX"]:
        raise ValidationError("Store name is required.", field="name")

    capacities = capacities or {}
    task_rows = []
    for task in record_store.select("task_types", order_by_created=False):
        if not task.allowed_for(store_type):
            continue
        capacity = parse_int(
            capacities.get(task.id), f"capacities[{task.id}]", default=task.count, minimum=0
        )
        task_rows.append({"task_type_id": task.id, "capacity": capacity})

    if any(not isinstance(hub_id, str) for hub_id in hub_ids or ()):
        raise ValidationError("Hub ids must be text.", field="hub_ids")
    hub_ids = list(dict.fromkeys(hub_ids or ())) if store_type == "garage" else []
    for hub_id in hub_ids:
        try:
            hub = record_store.get("stores", hub_id)
        except NotFoundError:
            raise ValidationError("Tagged hub does not exist.", field="hub_ids") from None
        if hub.type != "hub":
            raise ValidationError("Garages can only be tagged to hubs.", field="hub_ids")

    with record_store.transaction():
        store = record_store.insert("stores", [{
            "name": name,
            "type": store_type,
            **_scalar_fields(data),
        }])[0]
        if task_rows:
            record_store.insert("store_task_capacities", [
                {**row, "store_id": store.id} for row in task_rows
            ])
        if hub_ids:
            record_store.insert("garage_hub_tags", [
                {"garage_id": store.id, "hub_id": hub_id} for hub_id in hub_ids
            ])

    logger.info(
        f"Store created: {store.id} ({store.type}, {len(task_rows)} task capacities, "
        f"{len(hub_ids)} hub tags)"
    )
    return store_dict(store, with_links=True)


def list_stores(store_type=None):
    filters = {}
    if store_type:
        filters["type"] = choice(store_type, Store.TYPES, "type")
    return [store_dict(row) for row in record_store.select("stores", **filters)]


def list_hubs(search=""):
    """Hubs for the garage tagging picker, filtered by name."""
    search = (search or "").strip().lower()
    return [
        {"id": row.id, "name": row.name}
        for row in record_store.select("stores", type="hub")
        if search in row.name.lower()
    ]


def get_store(store_id):
    return store_dict(record_store.get("stores", store_id), with_links=True)


def update_store(store_id, data):
    """Update a store's scalar fields. Type and links are not editable here."""
    row = record_store.get("stores", store_id)
    patch = {}
    scalars = _scalar_fields(data)
    for field in SCALAR_FIELDS:
        if field not in data:
            continue
        if field == "name":
            patch["name"] = prefixed_name(data["name"])
        else:
            patch[field] = scalars[field]
    if patch.get("name") == current_app.config["STORE_NAME_PREFIX"]:
        raise ValidationError("Store name is required.", field="name")

    row = record_store.update("stores", store_id, patch)
    logger.info(f"Store {store_id} updated: {', '.join(sorted(patch)) or 'no changes'}")
    return store_dict(row, with_links=True)


def delete_store(store_id):
    """Delete a store together with its capacities and hub tags.

    Stores that still have carwash bookings are kept.
    """
    record_store.get("stores", store_id)
    if record_store.count("carwash", store_id=store_id):
        raise ValidationError(
            "This store has bookings and cannot be deleted.", field="store_id"
        )

    with record_store.transaction():
        record_store.delete_where("store_task_capacities", store_id=store_id)
        record_store.delete_where("garage_hub_tags", garage_id=store_id)
        record_store.delete_where("garage_hub_tags", hub_id=store_id)
        record_store.delete("stores", store_id)

    logger.info(f"Store {store_id} deleted")
