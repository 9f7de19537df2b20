"""TaskType model — global catalog of service capabilities.

Each task type carries a capacity model (per hour or max per day), a
default count, and which store types may offer it.
"""

import uuid

from app.extensions import db


class TaskType(db.Model):
    __tablename__ = "task_types"

    SLOT_TYPES = ["per_hour", "max_per_day"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    slot_type = db.Column(db.String(20), default="per_hour", nullable=False)
    count = db.Column(db.Integer, default=0, nullable=False)
    allowed_in_hub = db.Column(db.Boolean, default=False, nullable=False)
    allowed_in_garage = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def allowed_for(self, store_type):
        return self.allowed_in_hub if store_type == "hub" else self.allowed_in_garage

    def __repr__(self):
        return f"<TaskType {self.name} ({self.slot_type})>"
