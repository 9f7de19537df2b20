"""Leads blueprint — /admin/leads/*

Lead intake and the status pipeline (table and kanban views).
All routes require an admin session. Leads are never deleted.

Route Map:
  GET  /admin/leads/api/leads                        — Table or kanban projection
  POST /admin/leads/api/leads                        — Intake a new lead
  GET  /admin/leads/api/leads/<id>                   — Single lead
  GET  /admin/leads/api/remarks                      — Full remark catalog
  GET  /admin/leads/api/remarks/<status>             — Remark suggestions for a stage
  GET  /admin/leads/api/options                      — Intake form choices
  PUT  /admin/leads/api/leads/<id>/status            — Table: change status
  PUT  /admin/leads/api/leads/<id>/remark            — Table: change remark
  POST /admin/leads/api/leads/<id>/move              — Kanban: propose a move
  POST /admin/leads/api/leads/<id>/move/confirm      — Kanban: confirm with remark
  PUT  /admin/leads/api/leads/<id>/edit              — Kanban: save inline edit
"""

import logging

from flask import Blueprint, jsonify, request

from app.decorators import admin_required, payload
from app.errors import ValidationError
from app.services import lead_service, pipeline, slots
from app.services.lead_views import ALL_TAB, KanbanView, LeadBoard, TableView

logger = logging.getLogger(__name__)

leads_bp = Blueprint("leads", __name__, url_prefix="/admin/leads")


def _board():
    return LeadBoard(lead_service.list_leads())


def _require_key(data, key):
    if key not in data:
        raise ValidationError(f"'{key}' is required.", field=key)
    return data[key]


# ─── Listing ─────────────────────────────────────────────────────

@leads_bp.route("/api/leads")
@admin_required
def api_list():
    view = request.args.get("view", "table")
    tab = request.args.get("tab", ALL_TAB)
    board = _board()
    if view == "kanban":
        return jsonify(KanbanView(board).to_dict(tab))
    if view != "table":
        raise ValidationError(f"Unknown view '{view}'.", field="view")
    return jsonify(TableView(board).to_dict(tab))


@leads_bp.route("/api/leads/<lead_id>")
@admin_required
def api_get(lead_id):
    return jsonify(lead_service.get_lead(lead_id))


@leads_bp.route("/api/remarks")
@admin_required
def api_remark_catalog():
    return jsonify(pipeline.catalog())


@leads_bp.route("/api/remarks/<status>")
@admin_required
def api_remarks(status):
    return jsonify({"status": status, "remarks": list(pipeline.remarks_for(status))})


@leads_bp.route("/api/options")
@admin_required
def api_options():
    day = request.args.get("date")
    options = {
        "issues": lead_service.ISSUES,
        "vehicles": lead_service.VEHICLES,
        "time_slots": list(slots.LEAD_SLOTS),
    }
    if day:
        options["slots"] = slots.slot_state(
            slots.LEAD_SLOTS,
            slots.parse_date(day),
            slots.business_now(),
            request.args.get("selected", ""),
        )
    return jsonify(options)


# ─── Intake ──────────────────────────────────────────────────────

@leads_bp.route("/api/leads", methods=["POST"])
@admin_required
def api_create():
    lead = lead_service.create_lead(payload())
    return jsonify(lead), 201


# ─── Table view ──────────────────────────────────────────────────

@leads_bp.route("/api/leads/<lead_id>/status", methods=["PUT"])
@admin_required
def api_table_status(lead_id):
    data = payload()
    lead = TableView(_board()).change_status(lead_id, _require_key(data, "status"))
    return jsonify(lead)


@leads_bp.route("/api/leads/<lead_id>/remark", methods=["PUT"])
@admin_required
def api_table_remark(lead_id):
    data = payload()
    lead = TableView(_board()).change_remark(lead_id, _require_key(data, "remark"))
    return jsonify(lead)


# ─── Kanban view ─────────────────────────────────────────────────

@leads_bp.route("/api/leads/<lead_id>/move", methods=["POST"])
@admin_required
def api_kanban_move(lead_id):
    """A card was dropped on another column. Nothing is saved here.

    `editing_lead_id` tells the server a card is open in edit mode, in
    which case the drop is ignored.
    """
    data = payload()
    view = KanbanView(_board())
    if data.get("editing_lead_id"):
        view.begin_edit(data["editing_lead_id"])

    proposal = view.drop(lead_id, _require_key(data, "status"))
    if proposal is None:
        return jsonify({"ignored": True, "pending": None})
    return jsonify({"ignored": False, "pending": proposal})


@leads_bp.route("/api/leads/<lead_id>/move/confirm", methods=["POST"])
@admin_required
def api_kanban_confirm(lead_id):
    data = payload()
    status = _require_key(data, "status")
    remark = _require_key(data, "remark")

    view = KanbanView(_board())
    if view.drop(lead_id, status) is None:
        raise ValidationError("This lead cannot be moved to that stage.", field="status")
    return jsonify(view.confirm(remark))


@leads_bp.route("/api/leads/<lead_id>/edit", methods=["PUT"])
@admin_required
def api_kanban_edit(lead_id):
    data = payload()
    view = KanbanView(_board())
    view.begin_edit(lead_id)
    if "status" in data:
        view.set_edit_status(data["status"])
    if "remark" in data:
        view.set_edit_remark(data["remark"])
    return jsonify(view.save_edit())
