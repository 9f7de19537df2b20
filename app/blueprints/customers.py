"""Customers blueprint — /admin/customers/*

Route Map:
  GET    /admin/customers/api/customers                         — List (?city=)
  POST   /admin/customers/api/customers                         — Register with vehicles
  GET    /admin/customers/api/phone-check?phone=                — Duplicate phone check
  GET    /admin/customers/api/customers/<id>                    — Detail with vehicles
  PUT    /admin/customers/api/customers/<id>                    — Update + upsert vehicles
  DELETE /admin/customers/api/customers/<id>/vehicles/<vid>     — Remove one vehicle
"""

from flask import Blueprint, jsonify, request

from app.decorators import admin_required
from app.errors import ValidationError
from app.services import customer_service
from app.services.validation import validate_phone

customers_bp = Blueprint("customers", __name__, url_prefix="/admin/customers")


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object.")
    vehicles = data.get("vehicles") or []
    if not isinstance(vehicles, list):
        raise ValidationError("Vehicles must be a list.", field="vehicles")
    return data, vehicles


@customers_bp.route("/api/customers")
@admin_required
def api_list():
    return jsonify(customer_service.list_customers(request.args.get("city")))


@customers_bp.route("/api/customers", methods=["POST"])
@admin_required
def api_create():
    data, vehicles = _json_body()
    return jsonify(customer_service.create_customer(data, vehicles)), 201


@customers_bp.route("/api/phone-check")
@admin_required
def api_phone_check():
    phone = validate_phone(request.args.get("phone"))
    return jsonify({"phone": phone, "exists": customer_service.phone_exists(phone)})


@customers_bp.route("/api/customers/<customer_id>")
@admin_required
def api_detail(customer_id):
    return jsonify(customer_service.get_customer(customer_id))


@customers_bp.route("/api/customers/<customer_id>", methods=["PUT"])
@admin_required
def api_update(customer_id):
    data, vehicles = _json_body()
    return jsonify(customer_service.update_customer(customer_id, data, vehicles))


@customers_bp.route("/api/customers/<customer_id>/vehicles/<vehicle_id>", methods=["DELETE"])
@admin_required
def api_delete_vehicle(customer_id, vehicle_id):
    customer_service.delete_vehicle(customer_id, vehicle_id)
    return jsonify({"success": True})
