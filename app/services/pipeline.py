"""Lead pipeline stages and their remark suggestions.

Each stage is a tagged entry carrying its own label and ordered remark
suggestions. Views resolve everything through stage_for() / remarks_for()
rather than keeping their own tables.
"""

from typing import NamedTuple, Optional, Tuple


class PipelineStage(NamedTuple):
    key: str
    label: str
    remarks: Tuple[str, ...]


STAGES = (
    PipelineStage(
        "new", "New",
        ("Need to contact", "Verify phone", "Check city availability"),
    ),
    PipelineStage(
        "contacted", "Contacted",
        ("Follow up", "Waiting for response", "Send quote"),
    ),
    PipelineStage(
        "interested", "Interested",
        ("Negotiate", "Confirm time", "Ask for address"),
    ),
    PipelineStage(
        "converted", "Converted",
        ("Mark as paid", "Assign to garage", "Schedule appointment"),
    ),
    PipelineStage(
        "lost", "Lost",
        ("Not interested", "Switched provider", "Invalid lead"),
    ),
)

STATUS_ORDER = tuple(stage.key for stage in STAGES)

_BY_KEY = {stage.key: stage for stage in STAGES}


def stage_for(status) -> Optional[PipelineStage]:
    if not isinstance(status, str):
        return None
    return _BY_KEY.get(status)


def remarks_for(status) -> Tuple[str, ...]:
    """Suggested remarks for a stage, in display order.

    Unknown stages get an empty tuple: free text only, no default.
    """
    stage = stage_for(status)
    return stage.remarks if stage else ()


def default_remark(status):
    """First suggestion for the stage, or "" when there is none."""
    remarks = remarks_for(status)
    return remarks[0] if remarks else ""


def catalog():
    """The whole catalog as JSON-friendly dicts."""
    return [
        {"status": s.key, "label": s.label, "remarks": list(s.remarks)}
        for s in STAGES
    ]
