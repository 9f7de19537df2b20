"""Carwash pricing.

price = package price for (vehicle type, package) + 199 when express.
Combinations outside the table are rejected; nothing defaults to 0.
"""

from app.errors import ValidationError

PACKAGE_PRICES = {
    "Hatchback": {"Basic": 200, "Premium": 300, "Plus": 400},
    "Compact SUV": {"Basic": 220, "Premium": 350, "Plus": 600},
    "SUV": {"Basic": 250, "Premium": 400, "Plus": 800},
}

VEHICLE_TYPES = list(PACKAGE_PRICES)
PACKAGES = ["Basic", "Premium", "Plus"]

EXPRESS_SURCHARGE = 199


def base_price(vehicle_type, package):
    if not isinstance(vehicle_type, str) or vehicle_type not in PACKAGE_PRICES:
        raise ValidationError(
            f"No pricing for vehicle type '{vehicle_type}'.", field="vehicle_type"
        )
    packages = PACKAGE_PRICES[vehicle_type]
    if not isinstance(package, str) or package not in packages:
        raise ValidationError(
            f"No pricing for package '{package}' on a {vehicle_type}.", field="package"
        )
    return packages[package]


def price(vehicle_type, package, express):
    """Total price in rupees for a booking."""
    if not isinstance(express, bool):
        raise ValidationError("Express must be true or false.", field="express")
    return base_price(vehicle_type, package) + (EXPRESS_SURCHARGE if express else 0)
