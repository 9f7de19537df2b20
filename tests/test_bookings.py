"""Tests for carwash bookings and job cards.

Covers:
- Server-side pricing on create and edit (client price ignored)
- Submission-time slot checks, including an exhausted day
- Hub-only store selection
- Status changes and listing counts
- Job card intake (customer + vehicle in one unit)
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from app.errors import NoSlotsAvailableError, PersistenceError, ValidationError
from app.extensions import db
from app.models.booking import CarwashBooking
from app.models.customer import Customer, CustomerVehicle
from app.services import booking_service


def _form(store_id, **overrides):
    data = {
        "name": "Kiran Rao",
        "phone": "9812345678",
        "vehicle_type": "SUV",
        "package": "Premium",
        "express": True,
        "date": "2026-10-19",
        "time": "10:00 AM",
        "store_id": store_id,
    }
    data.update(overrides)
    return data


@pytest.fixture
def booked(app, seed_data, freeze_now):
    """One booking for tomorrow, created with the clock at 08:00."""
    freeze_now(datetime(2026, 10, 19, 8, 0))
    booking = booking_service.create_booking(
        _form(seed_data["hub_id"], date="2026-10-20", express=False)
    )
    return booking


# ─── Service ─────────────────────────────────────────────────────


class TestCreateBooking:
    def test_price_computed_server_side(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        booking = booking_service.create_booking(
            _form(seed_data["hub_id"], price=1)
        )
        assert booking["price"] == 400 + 199
        assert booking["status"] == "pending"
        assert booking["lead_source"] == "Website"
        assert booking["store_name"] == "AutoCare24 - MP Nagar"

    def test_passed_slot_rejected_without_write(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["hub_id"], time="09:00 AM"))
        assert exc.value.field == "time"
        assert CarwashBooking.query.count() == 0

    def test_exhausted_day(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 17, 30))
        with pytest.raises(NoSlotsAvailableError):
            booking_service.create_booking(_form(seed_data["hub_id"], time="05:00 PM"))
        assert CarwashBooking.query.count() == 0

    def test_unpriceable_combination(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["hub_id"], vehicle_type="Sedan"))
        assert exc.value.field == "vehicle_type"

    def test_express_typo_rejected(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["hub_id"], express="ture"))
        assert exc.value.field == "express"
        assert CarwashBooking.query.count() == 0

    def test_list_vehicle_type_rejected(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["hub_id"], vehicle_type=["SUV"]))
        assert exc.value.field == "vehicle_type"

    def test_garage_not_allowed(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["garage_id"]))
        assert exc.value.field == "store_id"

    def test_unknown_store(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError):
            booking_service.create_booking(_form("missing-store"))

    def test_missing_field(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with pytest.raises(ValidationError) as exc:
            booking_service.create_booking(_form(seed_data["hub_id"], name=" "))
        assert exc.value.field == "name"

    def test_persistence_failure_propagates(self, app, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 8, 0))
        with patch(
            "app.services.record_store.insert",
            side_effect=PersistenceError("Could not create booking records."),
        ):
            with pytest.raises(PersistenceError):
                booking_service.create_booking(_form(seed_data["hub_id"]))


class TestUpdateBooking:
    def test_edit_recomputes_price(self, booked):
        updated = booking_service.update_booking(
            booked["id"], {"package": "Plus", "express": True, "price": 5}
        )
        assert updated["price"] == 800 + 199

    def test_edit_without_slot_change_skips_slot_check(self, booked, freeze_now):
        # The booked slot has passed by now, but it is not being changed.
        freeze_now(datetime(2026, 10, 20, 18, 0))
        updated = booking_service.update_booking(booked["id"], {"name": "Kiran R."})
        assert updated["name"] == "Kiran R."

    def test_moving_to_passed_slot_rejected(self, booked, freeze_now):
        freeze_now(datetime(2026, 10, 20, 11, 30))
        with pytest.raises(ValidationError):
            booking_service.update_booking(booked["id"], {"time": "11:00 AM"})
        db.session.expire_all()
        assert db.session.get(CarwashBooking, booked["id"]).time == "10:00 AM"

    def test_status_change(self, booked):
        updated = booking_service.set_status(booked["id"], "confirmed")
        assert updated["status"] == "confirmed"

    def test_invalid_status(self, booked):
        with pytest.raises(ValidationError):
            booking_service.set_status(booked["id"], "lost")


class TestListBookings:
    def test_counts_and_filter(self, booked):
        booking_service.set_status(booked["id"], "completed")
        data = booking_service.list_bookings("completed")
        assert data["counts"]["all"] == 1
        assert data["counts"]["completed"] == 1
        assert len(data["bookings"]) == 1
        assert booking_service.list_bookings("pending")["bookings"] == []

    def test_missing_status_reads_as_pending(self, booked):
        row = db.session.get(CarwashBooking, booked["id"])
        row.status = None
        db.session.commit()
        data = booking_service.list_bookings()
        assert data["bookings"][0]["status"] == "pending"
        assert data["counts"]["pending"] == 1


# ─── API ─────────────────────────────────────────────────────────


class TestBookingAPI:
    def test_price_quote(self, admin_client):
        resp = admin_client.get(
            "/admin/bookings/api/price?vehicle_type=Hatchback&package=Basic&express=true"
        )
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["price"] == 399
        assert data["express_surcharge"] == 199

    def test_price_quote_unknown(self, admin_client):
        resp = admin_client.get("/admin/bookings/api/price?vehicle_type=Van&package=Basic")
        assert resp.status_code == 400

    def test_price_quote_express_typo(self, admin_client):
        resp = admin_client.get(
            "/admin/bookings/api/price?vehicle_type=SUV&package=Basic&express=ture"
        )
        assert resp.status_code == 400
        assert resp.get_json()["field"] == "express"

    def test_create_with_numeric_phone(self, admin_client, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        resp = admin_client.post(
            "/admin/bookings/api/carwash", json=_form(seed_data["hub_id"], phone=98123)
        )
        assert resp.status_code == 400
        assert resp.get_json()["field"] == "phone"

    def test_slots_endpoint_clears_stale_selection(self, admin_client, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        data = admin_client.get(
            "/admin/bookings/api/slots",
            query_string={"date": "2026-10-19", "selected": "09:00 AM"},
        ).get_json()
        assert data["selected"] == ""
        assert data["available"][0] == "10:00 AM"

    def test_slots_endpoint_tomorrow(self, admin_client, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        data = admin_client.get("/admin/bookings/api/slots?date=2026-10-20").get_json()
        assert len(data["available"]) == 8

    def test_options_lists_hubs_only(self, admin_client, seed_data):
        data = admin_client.get("/admin/bookings/api/options").get_json()
        assert [hub["id"] for hub in data["hubs"]] == [seed_data["hub_id"]]

    def test_create_and_fetch(self, admin_client, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 9, 30))
        resp = admin_client.post("/admin/bookings/api/carwash", json=_form(seed_data["hub_id"]))
        assert resp.status_code == 201
        booking_id = resp.get_json()["id"]

        resp = admin_client.get(f"/admin/bookings/api/carwash/{booking_id}")
        assert resp.status_code == 200
        assert resp.get_json()["price"] == 599

    def test_exhausted_day_code(self, admin_client, seed_data, freeze_now):
        freeze_now(datetime(2026, 10, 19, 18, 0))
        resp = admin_client.post(
            "/admin/bookings/api/carwash", json=_form(seed_data["hub_id"], time="05:00 PM")
        )
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "no_slots_available"

    def test_status_requires_value(self, admin_client, booked):
        resp = admin_client.put(f"/admin/bookings/api/carwash/{booked['id']}/status", json={})
        assert resp.status_code == 400

    def test_unknown_booking(self, admin_client):
        resp = admin_client.get("/admin/bookings/api/carwash/nope")
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "not_found"


class TestJobCards:
    def _card(self, **overrides):
        data = {
            "name": "Deepak Joshi",
            "phone": "9090909090",
            "address": "12 Arera Colony",
            "vehicle_type": "Car",
            "vehicle_subtype": "Hatchback",
            "vehicle_name": "Maruti Swift",
            "vehicle_number": "MP04AB1234",
            "odo_reading": "42000",
        }
        data.update(overrides)
        return data

    def test_creates_customer_and_vehicle(self, admin_client):
        resp = admin_client.post("/admin/bookings/api/jobcards", json=self._card())
        assert resp.status_code == 201
        assert Customer.query.filter_by(phone="9090909090").count() == 1
        vehicle = CustomerVehicle.query.one()
        assert vehicle.vehicle_number == "MP04AB1234"

    def test_duplicate_phone_rejected(self, admin_client):
        admin_client.post("/admin/bookings/api/jobcards", json=self._card())
        resp = admin_client.post("/admin/bookings/api/jobcards", json=self._card())
        assert resp.status_code == 400
        assert resp.get_json()["field"] == "phone"
        assert CustomerVehicle.query.count() == 1
