"""Task types blueprint — /admin/tasks/*

Route Map:
  GET  /admin/tasks/api/task-types        — List
  POST /admin/tasks/api/task-types        — Create
  PUT  /admin/tasks/api/task-types/<id>   — Update
"""

from flask import Blueprint, jsonify

from app.decorators import admin_required, payload
from app.services import task_service

tasks_bp = Blueprint("tasks", __name__, url_prefix="/admin/tasks")


@tasks_bp.route("/api/task-types")
@admin_required
def api_list():
    return jsonify(task_service.list_task_types())


@tasks_bp.route("/api/task-types", methods=["POST"])
@admin_required
def api_create():
    return jsonify(task_service.create_task_type(payload())), 201


@tasks_bp.route("/api/task-types/<task_id>", methods=["PUT"])
@admin_required
def api_update(task_id):
    return jsonify(task_service.update_task_type(task_id, payload()))
