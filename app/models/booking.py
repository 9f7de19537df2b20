"""Carwash booking model.

Price is always derived from (vehicle_type, package, express) by
app.services.pricing; it is stored for reporting, never trusted as input.
"""

import uuid

from app.extensions import db


class CarwashBooking(db.Model):
    __tablename__ = "carwash"

    STATUSES = ["pending", "confirmed", "completed", "cancelled"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    vehicle_type = db.Column(db.String(50), nullable=False)
    package = db.Column(db.String(50), nullable=False)
    express = db.Column(db.Boolean, default=False, nullable=False)
    date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    time = db.Column(db.String(20), nullable=False)  # e.g. "09:00 AM"
    price = db.Column(db.Integer, nullable=False)
    store_id = db.Column(
        db.String(36), db.ForeignKey("stores.id"), nullable=True
    )
    status = db.Column(db.String(20), default="pending", nullable=True)
    lead_source = db.Column(db.String(50), nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    store = db.relationship("Store", foreign_keys=[store_id])

    def __repr__(self):
        return f"<CarwashBooking {self.name} {self.date} {self.time}>"
