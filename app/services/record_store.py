"""Record store — generic CRUD over the dashboard's named collections.

Every screen talks to the backing database through these functions
instead of touching models directly:

- select(collection, **filters): equality filters, newest first
- get(collection, record_id): single row or NotFoundError
- insert(collection, rows): create rows from dicts
- update(collection, record_id, patch): patch one row by id
- delete(collection, record_id) / delete_where(collection, **filters)

Writes commit immediately unless they run inside transaction(), which
commits once at the end or rolls the whole unit back. Database failures
roll the session back and surface as PersistenceError.
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError

from app.errors import NotFoundError, PersistenceError
from app.extensions import db
from app.models.admin_user import AdminUser
from app.models.booking import CarwashBooking
from app.models.customer import Customer, CustomerVehicle
from app.models.lead import Lead
from app.models.store import GarageHubTag, Store, StoreTaskCapacity
from app.models.task_type import TaskType

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "leads": Lead,
    "carwash": CarwashBooking,
    "customers": Customer,
    "customer_vehicles": CustomerVehicle,
    "stores": Store,
    "task_types": TaskType,
    "store_task_capacities": StoreTaskCapacity,
    "garage_hub_tags": GarageHubTag,
    "admin_users": AdminUser,
}

# Human-readable names for "not found" messages.
LABELS = {
    "leads": "Lead",
    "carwash": "Booking",
    "customers": "Customer",
    "customer_vehicles": "Vehicle",
    "stores": "Store",
    "task_types": "Task type",
    "store_task_capacities": "Task capacity",
    "garage_hub_tags": "Hub tag",
    "admin_users": "User",
}

_ATOMIC_KEY = "record_store.atomic"


def model_for(collection):
    """Return the model class backing a collection name."""
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection '{collection}'.") from None


def _in_transaction():
    return db.session.info.get(_ATOMIC_KEY, False)


def _fail(collection, action, exc):
    db.session.rollback()
    logger.error(f"Record store {action} on '{collection}' failed: {exc}")
    return PersistenceError(
        f"Could not {action} {LABELS.get(collection, collection).lower()} records. "
        "Please try again."
    )


def _finish(collection, action):
    """Commit the write, or only flush when inside transaction()."""
    try:
        if _in_transaction():
            db.session.flush()
        else:
            db.session.commit()
    except SQLAlchemyError as e:
        raise _fail(collection, action, e) from e


@contextmanager
def transaction():
    """Group several writes into one commit.

    Nested use joins the outer unit. If anything inside raises, every
    write made in the block is rolled back and the error propagates
    (database errors as PersistenceError).
    """
    if _in_transaction():
        yield
        return

    db.session.info[_ATOMIC_KEY] = True
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise PersistenceError(
            "The change could not be saved. Nothing was written."
        ) from e
    except Exception:
        db.session.rollback()
        logger.info("Transaction rolled back after an error inside the unit")
        raise
    finally:
        db.session.info.pop(_ATOMIC_KEY, None)


def select(collection, order_by_created=True, **filters):
    """Return rows matching all equality filters, newest first by default."""
    model = model_for(collection)
    query = model.query.filter_by(**filters)
    if order_by_created:
        query = query.order_by(model.created_at.desc())
    try:
        return query.all()
    except SQLAlchemyError as e:
        raise _fail(collection, "load", e) from e


def count(collection, **filters):
    model = model_for(collection)
    try:
        return model.query.filter_by(**filters).count()
    except SQLAlchemyError as e:
        raise _fail(collection, "count", e) from e


def get(collection, record_id):
    """Return one row by id. Raises NotFoundError when it does not exist."""
    model = model_for(collection)
    try:
        row = db.session.get(model, record_id) if record_id else None
    except SQLAlchemyError as e:
        raise _fail(collection, "load", e) from e
    if row is None:
        raise NotFoundError(f"{LABELS[collection]} not found.")
    return row


def _check_columns(model, values):
    columns = set(model.__table__.columns.keys())
    unknown = set(values) - columns
    if unknown:
        raise ValueError(
            f"Unknown field(s) for {model.__tablename__}: {', '.join(sorted(unknown))}"
        )


def insert(collection, rows):
    """Create one row per dict in `rows` and return the created rows."""
    model = model_for(collection)
    created = []
    for values in rows:
        _check_columns(model, values)
        created.append(model(**values))
    db.session.add_all(created)
    _finish(collection, "create")
    return created


def update(collection, record_id, patch):
    """Apply `patch` to the row with `record_id` and return it."""
    model = model_for(collection)
    _check_columns(model, patch)
    row = get(collection, record_id)
    for field, value in patch.items():
        setattr(row, field, value)
    _finish(collection, "update")
    return row


def delete(collection, record_id):
    row = get(collection, record_id)
    db.session.delete(row)
    _finish(collection, "delete")


def delete_where(collection, **filters):
    """Delete every row matching the filters. Returns how many went."""
    rows = select(collection, order_by_created=False, **filters)
    for row in rows:
        db.session.delete(row)
    _finish(collection, "delete")
    return len(rows)


def to_dict(row, exclude=()):
    """Serialize a row's columns to a JSON-safe dict."""
    result = {}
    for column in row.__table__.columns:
        if column.key in exclude:
            continue
        value = getattr(row, column.key)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        result[column.key] = value
    return result
