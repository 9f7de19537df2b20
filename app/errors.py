"""Error taxonomy for dashboard actions.

- ValidationError: the submission is incomplete or breaks a business rule.
  Blocks the write and carries a user-facing message.
- NoSlotsAvailableError: every slot for today has already passed.
- PersistenceError: the backing store rejected a read or write.
- NotFoundError: a referenced record does not exist.

Every failure is terminal for the user action; nothing is retried.
"""


class DashboardError(Exception):
    """Base class. `message` is safe to show to the operator."""

    status_code = 500
    code = "error"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class ValidationError(DashboardError):
    status_code = 400
    code = "validation_error"

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

    def to_dict(self):
        data = super().to_dict()
        data["field"] = self.field
        return data


class NoSlotsAvailableError(ValidationError):
    code = "no_slots_available"


class PersistenceError(DashboardError):
    status_code = 503
    code = "persistence_error"


class NotFoundError(DashboardError):
    status_code = 404
    code = "not_found"
