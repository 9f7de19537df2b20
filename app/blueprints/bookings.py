"""Bookings blueprint — /admin/bookings/*

Carwash bookings and job card intake.

Route Map:
  GET  /admin/bookings/api/options              — Form choices (vehicles, packages, hubs)
  GET  /admin/bookings/api/slots?date=          — Available slots for a date
  GET  /admin/bookings/api/price                — Price quote
  GET  /admin/bookings/api/carwash              — List (filter by ?status=)
  POST /admin/bookings/api/carwash              — Create booking
  GET  /admin/bookings/api/carwash/<id>         — Booking detail
  PUT  /admin/bookings/api/carwash/<id>         — Edit booking
  PUT  /admin/bookings/api/carwash/<id>/status  — Change status
  POST /admin/bookings/api/jobcards             — Job card (customer + vehicle)
"""

from flask import Blueprint, jsonify, request

from app.decorators import admin_required, payload
from app.errors import ValidationError
from app.models.booking import CarwashBooking
from app.services import booking_service, customer_service, pricing, slots, store_service
from app.services.validation import parse_bool

bookings_bp = Blueprint("bookings", __name__, url_prefix="/admin/bookings")


@bookings_bp.route("/api/options")
@admin_required
def api_options():
    return jsonify({
        "vehicle_types": pricing.VEHICLE_TYPES,
        "packages": pricing.PACKAGES,
        "prices": pricing.PACKAGE_PRICES,
        "express_surcharge": pricing.EXPRESS_SURCHARGE,
        "time_slots": list(slots.CARWASH_SLOTS),
        "statuses": CarwashBooking.STATUSES,
        "hubs": store_service.list_hubs(),
        "vehicle_subcategories": customer_service.VEHICLE_SUBCATEGORIES,
    })


@bookings_bp.route("/api/slots")
@admin_required
def api_slots():
    """Slots for the chosen date; `selected` is cleared if it went stale."""
    day = request.args.get("date")
    if not day:
        return jsonify({"date": None, "available": [], "selected": "", "exhausted": False})
    state = slots.slot_state(
        slots.CARWASH_SLOTS,
        slots.parse_date(day),
        slots.business_now(),
        request.args.get("selected", ""),
    )
    return jsonify(state)


@bookings_bp.route("/api/price")
@admin_required
def api_price():
    return jsonify(booking_service.quote(
        request.args.get("vehicle_type"),
        request.args.get("package"),
        parse_bool(request.args.get("express"), "express"),
    ))


@bookings_bp.route("/api/carwash")
@admin_required
def api_list():
    return jsonify(booking_service.list_bookings(request.args.get("status")))


@bookings_bp.route("/api/carwash", methods=["POST"])
@admin_required
def api_create():
    return jsonify(booking_service.create_booking(payload())), 201


@bookings_bp.route("/api/carwash/<booking_id>")
@admin_required
def api_detail(booking_id):
    return jsonify(booking_service.get_booking(booking_id))


@bookings_bp.route("/api/carwash/<booking_id>", methods=["PUT"])
@admin_required
def api_update(booking_id):
    return jsonify(booking_service.update_booking(booking_id, payload()))


@bookings_bp.route("/api/carwash/<booking_id>/status", methods=["PUT"])
@admin_required
def api_status(booking_id):
    status = payload().get("status")
    if not status:
        raise ValidationError("Status is required.", field="status")
    return jsonify(booking_service.set_status(booking_id, status))


@bookings_bp.route("/api/jobcards", methods=["POST"])
@admin_required
def api_jobcard():
    return jsonify(customer_service.create_job_card(payload())), 201
