"""Lead pipeline views — table and kanban over one LeadBoard.

LeadBoard owns the on-screen list of leads. It changes only after the
transition engine confirms a write, and then only by replacing the
record with the same id. Per-status counts are always computed from
that list, never stored.

TableView: inline status/remark selectors that apply immediately.
KanbanView: drag a card to another column to propose a move; the move
happens only once a remark is confirmed. Inline card editing and
dragging are mutually exclusive.
"""

import logging

from app.errors import NotFoundError, ValidationError
from app.services import lead_service, pipeline

logger = logging.getLogger(__name__)

ALL_TAB = "all"


class LeadBoard:
    def __init__(self, leads, engine=None):
        self._leads = [dict(lead) for lead in leads]
        self._engine = engine or lead_service.transition

    @property
    def leads(self):
        return [dict(lead) for lead in self._leads]

    def find(self, lead_id):
        for lead in self._leads:
            if lead["id"] == lead_id:
                return dict(lead)
        raise NotFoundError("Lead not found.")

    def apply(self, lead_id, new_status, remark):
        """Run a transition and, once it is saved, patch the list by id."""
        lead = self.find(lead_id)
        updated = self._engine(lead, new_status, remark)
        self._leads = [
            dict(updated) if row["id"] == lead_id else row for row in self._leads
        ]
        return dict(updated)

    def counts(self):
        result = {ALL_TAB: len(self._leads)}
        for status in pipeline.STATUS_ORDER:
            result[status] = sum(1 for lead in self._leads if lead["status"] == status)
        return result

    def filtered(self, tab=ALL_TAB):
        if tab in (None, "", ALL_TAB):
            return self.leads
        if tab not in pipeline.STATUS_ORDER:
            raise ValidationError(f"Unknown tab '{tab}'.", field="tab")
        return [dict(lead) for lead in self._leads if lead["status"] == tab]


class TableView:
    def __init__(self, board):
        self.board = board

    def change_status(self, lead_id, new_status):
        """Apply a status picked in the row's selector.

        The lead keeps its current remark; a lead without one gets the
        new stage's first suggestion.
        """
        lead = self.board.find(lead_id)
        remark = lead.get("remark") or pipeline.default_remark(new_status)
        return self.board.apply(lead_id, new_status, remark)

    def change_remark(self, lead_id, remark):
        lead = self.board.find(lead_id)
        return self.board.apply(lead_id, lead["status"], remark)

    def to_dict(self, tab=ALL_TAB):
        rows = []
        for lead in self.board.filtered(tab):
            rows.append({**lead, "remark_options": list(pipeline.remarks_for(lead["status"]))})
        return {
            "view": "table",
            "tab": tab or ALL_TAB,
            "counts": self.board.counts(),
            "statuses": pipeline.catalog(),
            "rows": rows,
        }


class KanbanView:
    def __init__(self, board):
        self.board = board
        self.editing_id = None
        self.edited = None
        self.pending = None

    # --- Drag and drop ---

    def drop(self, lead_id, target_status):
        """Handle a card dropped on a column.

        Returns the move proposal awaiting a remark, or None when the drop
        is ignored (a card is being edited, same column, unknown column).
        Never changes any lead.
        """
        if self.editing_id is not None:
            logger.debug(f"Ignoring drop of {lead_id}: card {self.editing_id} in edit mode")
            return None
        if pipeline.stage_for(target_status) is None:
            return None

        lead = self.board.find(lead_id)
        if lead["status"] == target_status:
            return None

        self.pending = {
            "lead_id": lead_id,
            "from_status": lead["status"],
            "status": target_status,
            "remarks": list(pipeline.remarks_for(target_status)),
        }
        return dict(self.pending)

    def confirm(self, remark):
        """Apply the pending move with the remark picked in the modal.

        The remark has to be one of the suggestions offered for the target
        stage; free text goes through the table or inline edit instead.
        On failure the proposal stays open so the operator can pick again
        or cancel.
        """
        if self.pending is None:
            raise ValidationError("No move is waiting for confirmation.")
        offered = self.pending["remarks"] or [""]
        if remark is None or remark not in offered:
            raise ValidationError("Select a remark to move this lead.", field="remark")

        updated = self.board.apply(self.pending["lead_id"], self.pending["status"], remark)
        self.pending = None
        return updated

    def cancel_move(self):
        self.pending = None

    # --- Inline editing ---

    def begin_edit(self, lead_id):
        lead = self.board.find(lead_id)
        self.pending = None
        self.editing_id = lead_id
        self.edited = {"status": lead["status"], "remark": lead.get("remark") or ""}

    def set_edit_status(self, status):
        """Choosing a stage while editing resets the remark to its first suggestion."""
        self._require_editing()
        if pipeline.stage_for(status) is None:
            raise ValidationError(f"Invalid status '{status}'.", field="status")
        self.edited = {"status": status, "remark": pipeline.default_remark(status)}

    def set_edit_remark(self, remark):
        self._require_editing()
        self.edited["remark"] = remark

    def save_edit(self):
        """Save the edited card. Edit mode ends only once the write succeeds."""
        self._require_editing()
        updated = self.board.apply(
            self.editing_id, self.edited["status"], self.edited["remark"] or ""
        )
        self.cancel_edit()
        return updated

    def cancel_edit(self):
        self.editing_id = None
        self.edited = None

    def _require_editing(self):
        if self.editing_id is None:
            raise ValidationError("No lead is being edited.")

    def to_dict(self, tab=ALL_TAB):
        visible = {lead["id"] for lead in self.board.filtered(tab)}
        columns = []
        for stage in pipeline.STAGES:
            if tab not in (None, "", ALL_TAB) and tab != stage.key:
                continue
            columns.append({
                "status": stage.key,
                "label": stage.label,
                "leads": [
                    lead for lead in self.board.leads
                    if lead["status"] == stage.key and lead["id"] in visible
                ],
            })
        return {
            "view": "kanban",
            "tab": tab or ALL_TAB,
            "counts": self.board.counts(),
            "columns": columns,
            "editing_id": self.editing_id,
            "pending": dict(self.pending) if self.pending else None,
        }
