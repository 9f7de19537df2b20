"""Customer and CustomerVehicle models.

A customer owns zero or more vehicles. Vehicles are removed only by an
explicit delete; editing a customer never cascades into its vehicles.
"""

import uuid

from app.extensions import db


class Customer(db.Model):
    __tablename__ = "customers"

    BALANCE_TYPES = ["Cr", "Dr"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), unique=True, nullable=False)
    whatsapp = db.Column(db.String(20), nullable=True)
    address_street = db.Column(db.String(255), nullable=True)
    address_city = db.Column(db.String(100), nullable=True)
    address_state = db.Column(db.String(100), nullable=True)
    address_pincode = db.Column(db.String(20), nullable=True)
    address_lat = db.Column(db.String(30), nullable=True)
    address_lng = db.Column(db.String(30), nullable=True)
    opening_balance = db.Column(db.Float, default=0, nullable=False)
    balance_type = db.Column(db.String(2), default="Cr", nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    vehicles = db.relationship(
        "CustomerVehicle",
        back_populates="customer",
        lazy="dynamic",
        order_by="CustomerVehicle.created_at",
    )

    def __repr__(self):
        return f"<Customer {self.name} {self.phone}>"


class CustomerVehicle(db.Model):
    __tablename__ = "customer_vehicles"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    customer_id = db.Column(
        db.String(36),
        db.ForeignKey("customers.id"),
        nullable=False,
        index=True,
    )
    vehicle_type = db.Column(db.String(50), nullable=False)  # Car | Auto | Truck | Bike
    vehicle_subtype = db.Column(db.String(50), nullable=False)
    vehicle_name = db.Column(db.String(255), nullable=True)
    vehicle_number = db.Column(db.String(50), nullable=True)
    odo_reading = db.Column(db.Integer, nullable=True)
    last_service_date = db.Column(db.String(10), nullable=True)
    basic_issues = db.Column(db.Text, nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    customer = db.relationship("Customer", back_populates="vehicles")

    def __repr__(self):
        return f"<CustomerVehicle {self.vehicle_type}/{self.vehicle_subtype}>"
