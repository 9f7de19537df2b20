"""Tests for stores and task types.

Covers:
- Name prefixing
- Capacities granted only for task types allowed at the store type
- Garage-to-hub tagging rules
- Deleting a store with its capacities and tags
- Task type catalog CRUD
"""

from datetime import datetime

import pytest

from app.errors import ValidationError
from app.models.store import GarageHubTag, Store, StoreTaskCapacity
from app.models.task_type import TaskType
from app.services import booking_service, store_service, task_service


class TestCreateStore:
    def test_name_is_prefixed_once(self, app, seed_data):
        store = store_service.create_store({"name": "Arera Colony", "type": "hub"})
        assert store["name"] == "AutoCare24 - Arera Colony"
        again = store_service.create_store({"name": "AutoCare24 - Habibganj", "type": "hub"})
        assert again["name"] == "AutoCare24 - Habibganj"

    def test_blank_name_rejected(self, app, seed_data):
        with pytest.raises(ValidationError):
            store_service.create_store({"name": " ", "type": "hub"})

    def test_unknown_type(self, app, seed_data):
        with pytest.raises(ValidationError) as exc:
            store_service.create_store({"name": "Depot", "type": "warehouse"})
        assert exc.value.field == "type"

    def test_hub_gets_hub_tasks_with_defaults(self, app, seed_data):
        store = store_service.create_store({"name": "Kolar", "type": "hub"})
        granted = {c["task_type_id"]: c["capacity"] for c in store["capacities"]}
        assert granted == {seed_data["wash_task_id"]: 4, seed_data["oil_task_id"]: 2}

    def test_capacity_override(self, app, seed_data):
        store = store_service.create_store(
            {"name": "Kolar", "type": "garage"},
            capacities={seed_data["service_task_id"]: "6", seed_data["wash_task_id"]: 9},
        )
        granted = {c["task_type_id"]: c["capacity"] for c in store["capacities"]}
        assert granted == {seed_data["service_task_id"]: 6, seed_data["oil_task_id"]: 2}

    def test_negative_capacity_rejected(self, app, seed_data):
        with pytest.raises(ValidationError):
            store_service.create_store(
                {"name": "Kolar", "type": "hub"},
                capacities={seed_data["wash_task_id"]: -1},
            )
        assert Store.query.count() == 2

    def test_garage_tagged_to_hubs(self, app, seed_data):
        store = store_service.create_store(
            {"name": "Awadhpuri Garage", "type": "garage"},
            hub_ids=[seed_data["hub_id"], seed_data["hub_id"]],
        )
        assert store["hub_ids"] == [seed_data["hub_id"]]

    def test_hub_ignores_hub_tags(self, app, seed_data):
        store = store_service.create_store(
            {"name": "Second Hub", "type": "hub"}, hub_ids=[seed_data["hub_id"]]
        )
        assert store["hub_ids"] == []
        assert GarageHubTag.query.count() == 0

    def test_garage_cannot_tag_a_garage(self, app, seed_data):
        with pytest.raises(ValidationError) as exc:
            store_service.create_store(
                {"name": "New Garage", "type": "garage"}, hub_ids=[seed_data["garage_id"]]
            )
        assert exc.value.field == "hub_ids"
        assert Store.query.count() == 2

    def test_non_text_hub_id_rejected(self, app, seed_data):
        with pytest.raises(ValidationError) as exc:
            store_service.create_store(
                {"name": "New Garage", "type": "garage"}, hub_ids=[[seed_data["hub_id"]]]
            )
        assert exc.value.field == "hub_ids"

    def test_list_type_rejected(self, app, seed_data):
        with pytest.raises(ValidationError) as exc:
            store_service.create_store({"name": "Depot", "type": ["hub"]})
        assert exc.value.field == "type"


class TestStoreQueries:
    def test_list_by_type(self, app, seed_data):
        hubs = store_service.list_stores("hub")
        assert [s["id"] for s in hubs] == [seed_data["hub_id"]]

    def test_hub_search(self, app, seed_data):
        assert store_service.list_hubs("mp nag")[0]["id"] == seed_data["hub_id"]
        assert store_service.list_hubs("kolar") == []

    def test_update_keeps_prefix(self, app, seed_data):
        store = store_service.update_store(
            seed_data["garage_id"], {"name": "Kolar Road Garage", "manager_number": "9000000001"}
        )
        assert store["name"] == "AutoCare24 - Kolar Road Garage"
        assert store["manager_number"] == "9000000001"
        assert store["type"] == "garage"


class TestDeleteStore:
    def test_delete_removes_links(self, app, seed_data):
        garage = store_service.create_store(
            {"name": "Temp Garage", "type": "garage"}, hub_ids=[seed_data["hub_id"]]
        )
        store_service.delete_store(garage["id"])
        assert StoreTaskCapacity.query.filter_by(store_id=garage["id"]).count() == 0
        assert GarageHubTag.query.count() == 0

    def test_deleting_hub_removes_tags_pointing_at_it(self, app, seed_data):
        hub = store_service.create_store({"name": "Temp Hub", "type": "hub"})
        store_service.create_store(
            {"name": "Tagged Garage", "type": "garage"}, hub_ids=[hub["id"]]
        )
        store_service.delete_store(hub["id"])
        assert GarageHubTag.query.count() == 0

    def test_store_with_bookings_kept(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        booking_service.create_booking({
            "name": "Kiran Rao", "phone": "9812345678", "vehicle_type": "SUV",
            "package": "Basic", "date": "2026-10-20", "time": "10:00 AM",
            "store_id": seed_data["hub_id"],
        })
        with pytest.raises(ValidationError):
            store_service.delete_store(seed_data["hub_id"])
        assert Store.query.count() == 2


class TestStoreAPI:
    def test_create(self, admin_client, seed_data):
        resp = admin_client.post("/admin/stores/api/stores", json={
            "name": "Bairagarh", "type": "garage", "city": "Bhopal",
            "hub_ids": [seed_data["hub_id"]],
            "capacities": {seed_data["service_task_id"]: 3},
        })
        assert resp.status_code == 201
        data = resp.get_json()
        assert data["name"] == "AutoCare24 - Bairagarh"
        assert data["hub_ids"] == [seed_data["hub_id"]]

    def test_bad_capacities_shape(self, admin_client):
        resp = admin_client.post(
            "/admin/stores/api/stores", json={"name": "X", "type": "hub", "capacities": [1]}
        )
        assert resp.status_code == 400

    def test_delete(self, admin_client, seed_data):
        resp = admin_client.delete(f"/admin/stores/api/stores/{seed_data['garage_id']}")
        assert resp.status_code == 200
        assert Store.query.count() == 1

    def test_detail(self, admin_client, seed_data):
        data = admin_client.get(f"/admin/stores/api/stores/{seed_data['hub_id']}").get_json()
        assert data["type"] == "hub"
        assert "capacities" in data


class TestTaskTypes:
    def test_create_defaults(self, app, seed_data):
        task = task_service.create_task_type({"name": "Polishing"})
        assert task["slot_type"] == "per_hour"
        assert task["count"] == 0
        assert task["allowed_in_hub"] is False

    def test_invalid_slot_type(self, app, seed_data):
        with pytest.raises(ValidationError):
            task_service.create_task_type({"name": "Polishing", "slot_type": "weekly"})

    def test_flag_typo_rejected(self, app, seed_data):
        with pytest.raises(ValidationError) as exc:
            task_service.create_task_type({"name": "Polishing", "allowed_in_hub": "yse"})
        assert exc.value.field == "allowed_in_hub"

    def test_update(self, app, seed_data):
        task = task_service.update_task_type(seed_data["oil_task_id"], {
            "name": "Oil Change", "slot_type": "max_per_day", "count": "5",
            "allowed_in_hub": "true", "allowed_in_garage": "false",
        })
        assert task["slot_type"] == "max_per_day"
        assert task["count"] == 5
        assert task["allowed_in_garage"] is False

    def test_seed_defaults_skips_existing(self, app, seed_data):
        assert task_service.seed_defaults() == []
        TaskType.query.filter_by(name="Oil Change").delete()
        assert task_service.seed_defaults() == ["Oil Change"]

    def test_api(self, admin_client):
        resp = admin_client.post("/admin/tasks/api/task-types", json={
            "name": "Tyre Rotation", "count": 3, "allowed_in_garage": True,
        })
        assert resp.status_code == 201
        names = [t["name"] for t in admin_client.get("/admin/tasks/api/task-types").get_json()]
        assert "Tyre Rotation" in names
