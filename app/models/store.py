"""Store models.

- Store: a hub or a garage.
- StoreTaskCapacity: per-store capacity granted for a task type.
- GarageHubTag: many-to-many link from a garage to the hubs it serves.
"""

import uuid

from app.extensions import db


class Store(db.Model):
    __tablename__ = "stores"

    TYPES = ["hub", "garage"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(10), nullable=False)  # hub | garage
    city = db.Column(db.String(100), nullable=True)
    address = db.Column(db.Text, nullable=True)
    lat = db.Column(db.Float, nullable=True)
    lng = db.Column(db.Float, nullable=True)
    manager_name = db.Column(db.String(255), nullable=True)
    manager_number = db.Column(db.String(20), nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    capacities = db.relationship(
        "StoreTaskCapacity", back_populates="store", lazy="dynamic"
    )

    def __repr__(self):
        return f"<Store {self.name} ({self.type})>"


class StoreTaskCapacity(db.Model):
    __tablename__ = "store_task_capacities"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    store_id = db.Column(
        db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True
    )
    task_type_id = db.Column(
        db.String(36), db.ForeignKey("task_types.id"), nullable=False
    )
    capacity = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    store = db.relationship("Store", back_populates="capacities")
    task_type = db.relationship("TaskType", lazy="joined")

    def __repr__(self):
        return f"<StoreTaskCapacity {self.store_id}:{self.task_type_id}={self.capacity}>"


class GarageHubTag(db.Model):
    __tablename__ = "garage_hub_tags"

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    garage_id = db.Column(
        db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True
    )
    hub_id = db.Column(
        db.String(36), db.ForeignKey("stores.id"), nullable=False, index=True
    )
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )

    __table_args__ = (
        db.UniqueConstraint("garage_id", "hub_id", name="uq_garage_hub"),
    )

    def __repr__(self):
        return f"<GarageHubTag {self.garage_id} -> {self.hub_id}>"
