"""Common acadsched-specific exceptions."""


class AcadSchedValueError(ValueError):
    """Raised when acadsched detects invalid user-provided data."""


class RecurrenceConfigError(AcadSchedValueError):
    """Raised when a recurrence rule carries a kind the engine cannot evaluate."""


__all__ = ["AcadSchedValueError", "RecurrenceConfigError"]
