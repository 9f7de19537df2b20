"""Stores blueprint — /admin/stores/*

Route Map:
  GET    /admin/stores/api/stores          — List (?type=hub|garage)
  POST   /admin/stores/api/stores          — Create with capacities + hub tags
  GET    /admin/stores/api/stores/<id>     — Detail with capacities + hub tags
  PUT    /admin/stores/api/stores/<id>     — Update details
  DELETE /admin/stores/api/stores/<id>     — Delete with its capacities + tags
  GET    /admin/stores/api/hubs?search=    — Hub picker
"""

from flask import Blueprint, jsonify, request

from app.decorators import admin_required, payload
from app.errors import ValidationError
from app.services import store_service

stores_bp = Blueprint("stores", __name__, url_prefix="/admin/stores")


@stores_bp.route("/api/stores")
@admin_required
def api_list():
    return jsonify(store_service.list_stores(request.args.get("type")))


@stores_bp.route("/api/stores", methods=["POST"])
@admin_required
def api_create():
    data = payload()
    capacities = data.get("capacities") or {}
    hub_ids = data.get("hub_ids") or []
    if not isinstance(capacities, dict):
        raise ValidationError("Capacities must map task type ids to numbers.", field="capacities")
    if not isinstance(hub_ids, list):
        raise ValidationError("Hub ids must be a list.", field="hub_ids")
    store = store_service.create_store(data, capacities, hub_ids)
    return jsonify(store), 201


@stores_bp.route("/api/stores/<store_id>")
@admin_required
def api_detail(store_id):
    return jsonify(store_service.get_store(store_id))


@stores_bp.route("/api/stores/<store_id>", methods=["PUT"])
@admin_required
def api_update(store_id):
    return jsonify(store_service.update_store(store_id, payload()))


@stores_bp.route("/api/stores/<store_id>", methods=["DELETE"])
@admin_required
def api_delete(store_id):
    store_service.delete_store(store_id)
    return jsonify({"success": True})


@stores_bp.route("/api/hubs")
@admin_required
def api_hubs():
    return jsonify(store_service.list_hubs(request.args.get("search", "")))
