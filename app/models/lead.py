"""Lead model (sales pipeline).

Tracks inbound service inquiries through the five-stage funnel.
Pipeline: new -> contacted -> interested -> converted | lost
Any stage may move to any other; see app.services.pipeline.
"""

import uuid

from app.extensions import db


class Lead(db.Model):
    __tablename__ = "leads"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    vehicle = db.Column(db.String(50), nullable=False)  # Bike | Car | Auto | Truck
    issue = db.Column(db.String(100), nullable=False)
    date = db.Column(db.String(10), nullable=True)  # YYYY-MM-DD
    time = db.Column(db.String(50), nullable=True)  # slot label
    source = db.Column(db.String(50), nullable=False)
    remark = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default="new", nullable=False, index=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self):
        return f"<Lead {self.name} ({self.status})>"
