"""Dashboard blueprint — /admin/api/summary

Headline numbers for the back-office landing page.
"""

from flask import Blueprint, jsonify

from app.decorators import admin_required
from app.models.booking import CarwashBooking
from app.services import pipeline, record_store

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/admin")


@dashboard_bp.route("/api/summary")
@admin_required
def summary():
    # --- Pipeline counts ---
    pipeline_counts = {
        status: record_store.count("leads", status=status)
        for status in pipeline.STATUS_ORDER
    }

    # --- Bookings (rows without a status count as pending) ---
    booking_counts = {
        status: record_store.count("carwash", status=status)
        for status in CarwashBooking.STATUSES
    }
    booking_counts["pending"] += record_store.count("carwash", status=None)

    return jsonify({
        "leads": {"total": sum(pipeline_counts.values()), **pipeline_counts},
        "bookings": {"total": sum(booking_counts.values()), **booking_counts},
        "customers": record_store.count("customers"),
        "stores": {
            "hub": record_store.count("stores", type="hub"),
            "garage": record_store.count("stores", type="garage"),
        },
        "task_types": record_store.count("task_types"),
    })
