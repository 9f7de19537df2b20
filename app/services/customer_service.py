"""Customer service — registration, job cards, edits, vehicles.

Creating a customer with its vehicles, and editing a customer together
with its vehicles, each run in a single record-store transaction: either
every row is written or none is.
"""

import logging

from app.errors import ValidationError
from app.models.customer import Customer
from app.services import record_store
from app.services.validation import (
    choice,
    clean_text,
    parse_float,
    parse_int,
    require,
    validate_phone,
)

logger = logging.getLogger(__name__)

VEHICLE_SUBCATEGORIES = {
    "Car": ["Hatchback", "Sedan", "SUV", "Compact SUV"],
    "Auto": ["Passenger Auto", "Goods Auto"],
    "Truck": ["Mini Truck", "Heavy Truck", "Container Truck"],
    "Bike": ["Scooter", "Motorbike", "Cruiser"],
}

ADDRESS_FIELDS = [
    "address_street",
    "address_city",
    "address_state",
    "address_pincode",
    "address_lat",
    "address_lng",
]


def customer_dict(row, with_vehicles=False):
    data = record_store.to_dict(row, exclude=("updated_at",))
    if with_vehicles:
        data["vehicles"] = [
            record_store.to_dict(v, exclude=("updated_at",))
            for v in record_store.select(
                "customer_vehicles", order_by_created=False, customer_id=row.id
            )
        ]
    return data


def phone_exists(phone, exclude_id=None):
    rows = record_store.select("customers", order_by_created=False, phone=phone)
    return any(row.id != exclude_id for row in rows)


def _customer_fields(data):
    """Validate and normalise the customer part of a form."""
    require(data, ["name", "phone"])
    phone = validate_phone(data.get("phone"))
    whatsapp = (data.get("whatsapp") or "").strip()
    if whatsapp:
        validate_phone(whatsapp, field="whatsapp", label="WhatsApp number")

    fields = {
        "name": clean_text(data.get("name")),
        "phone": phone,
        "whatsapp": whatsapp or phone,
        "opening_balance": parse_float(
            data.get("opening_balance"), "opening_balance", default=0.0
        ),
        "balance_type": choice(
            data.get("balance_type") or "Cr", Customer.BALANCE_TYPES, "balance_type"
        ),
    }
    for field in ADDRESS_FIELDS:
        fields[field] = clean_text(data.get(field)) or None
    return fields


def _vehicle_fields(vehicle, index):
    field_prefix = f"vehicles[{index}]"
    if not isinstance(vehicle, dict):
        raise ValidationError("Each vehicle must be an object.", field=field_prefix)
    vehicle_type = vehicle.get("vehicle_type")
    if not isinstance(vehicle_type, str) or vehicle_type not in VEHICLE_SUBCATEGORIES:
        raise ValidationError(
            "Choose a vehicle type for every vehicle.", field=f"{field_prefix}.vehicle_type"
        )
    if vehicle.get("vehicle_subtype") not in VEHICLE_SUBCATEGORIES[vehicle_type]:
        raise ValidationError(
            f"Choose a valid {vehicle_type} subcategory.",
            field=f"{field_prefix}.vehicle_subtype",
        )
    return {
        "vehicle_type": vehicle_type,
        "vehicle_subtype": vehicle["vehicle_subtype"],
        "vehicle_name": clean_text(vehicle.get("vehicle_name")) or None,
        "vehicle_number": clean_text(vehicle.get("vehicle_number")) or None,
        "odo_reading": parse_int(
            vehicle.get("odo_reading"), f"{field_prefix}.odo_reading", minimum=0
        ),
        "last_service_date": (vehicle.get("last_service_date") or None),
        "basic_issues": clean_text(vehicle.get("basic_issues")) or None,
    }


def create_customer(data, vehicles):
    """Register a customer with at least one vehicle.

    The phone number is checked for duplicates before anything is
    written. Customer and vehicles are inserted in one transaction.

    Raises:
        ValidationError: missing fields, bad numbers, no vehicles,
            bad vehicle type/subtype, or phone already registered.
        PersistenceError: the write failed; nothing was saved.
    """
    fields = _customer_fields(data)
    if not vehicles:
        raise ValidationError("Add at least one vehicle.", field="vehicles")
    vehicle_rows = [_vehicle_fields(v, i) for i, v in enumerate(vehicles)]

    if phone_exists(fields["phone"]):
        logger.info(f"Rejected customer registration: phone {fields['phone']} exists")
        raise ValidationError("Phone already registered.", field="phone")

    with record_store.transaction():
        customer = record_store.insert("customers", [fields])[0]
        record_store.insert("customer_vehicles", [
            {**v, "customer_id": customer.id} for v in vehicle_rows
        ])

    logger.info(f"Customer registered: {customer.id} with {len(vehicle_rows)} vehicle(s)")
    return customer_dict(customer, with_vehicles=True)


def create_job_card(data):
    """Quick single-vehicle registration from the job card form."""
    customer = {key: data.get(key) for key in (
        "name", "phone", "whatsapp", "opening_balance", "balance_type",
    )}
    customer["address_street"] = data.get("address")
    vehicle = {key: data.get(key) for key in (
        "vehicle_type", "vehicle_subtype", "vehicle_name", "vehicle_number",
        "odo_reading", "last_service_date", "basic_issues",
    )}
    require(data, ["vehicle_type", "vehicle_subtype"])
    return create_customer(customer, [vehicle])


def list_customers(city=None):
    rows = record_store.select("customers")
    cities = sorted({row.address_city for row in rows if row.address_city})
    if city:
        rows = [row for row in rows if row.address_city == city]
    return {
        "customers": [customer_dict(row) for row in rows],
        "cities": cities,
    }


def get_customer(customer_id):
    return customer_dict(record_store.get("customers", customer_id), with_vehicles=True)


def update_customer(customer_id, data, vehicles=()):
    """Update a customer and upsert its vehicles in one transaction.

    Vehicles carrying an `id` are updated (they must belong to this
    customer); the rest are inserted. Vehicles left out are kept.
    """
    record_store.get("customers", customer_id)
    fields = _customer_fields(data)
    if phone_exists(fields["phone"], exclude_id=customer_id):
        raise ValidationError("Phone already registered.", field="phone")

    to_update, to_insert = [], []
    for index, vehicle in enumerate(vehicles):
        values = _vehicle_fields(vehicle, index)
        vehicle_id = vehicle.get("id")
        if vehicle_id is not None and not isinstance(vehicle_id, str):
            raise ValidationError("Unknown vehicle.", field=f"vehicles[{index}].id")
        if vehicle_id:
            existing = record_store.get("customer_vehicles", vehicle_id)
            if existing.customer_id != customer_id:
                raise ValidationError(
                    "Vehicle belongs to another customer.", field=f"vehicles[{index}].id"
                )
            to_update.append((vehicle_id, values))
        else:
            to_insert.append({**values, "customer_id": customer_id})

    with record_store.transaction():
        record_store.update("customers", customer_id, fields)
        for vehicle_id, values in to_update:
            record_store.update("customer_vehicles", vehicle_id, values)
        if to_insert:
            record_store.insert("customer_vehicles", to_insert)

    logger.info(
        f"Customer {customer_id} updated "
        f"({len(to_update)} vehicle(s) updated, {len(to_insert)} added)"
    )
    return get_customer(customer_id)


def delete_vehicle(customer_id, vehicle_id):
    vehicle = record_store.get("customer_vehicles", vehicle_id)
    if vehicle.customer_id != customer_id:
        raise ValidationError("Vehicle belongs to another customer.", field="vehicle_id")
    record_store.delete("customer_vehicles", vehicle_id)
    logger.info(f"Vehicle {vehicle_id} removed from customer {customer_id}")
