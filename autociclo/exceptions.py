# autociclo/exceptions.py
"""
Error taxonomy shared by the data layer.

Not-found is never an exception: single-record lookups return None.
Transaction aborts have no class of their own; run_in_transaction rolls back
and re-raises whatever the body raised.
"""

from typing import Any, Dict, Optional


class AutoCicloError(Exception):
    """Base class for every error raised by autociclo."""


class ValidationError(AutoCicloError):
    """Input rejected before reaching storage. `errors` maps field -> message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid input: {detail}")


class DuplicateKeyError(AutoCicloError):
    """A unique business key already exists. Raised before the write is attempted."""

    def __init__(self, field: str, value: Any, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"{field} '{value}' already exists")


class DuplicatePlateError(DuplicateKeyError):
    def __init__(self, plate: str):
        super().__init__("plate", plate, f"Plate '{plate}' already exists")


class DuplicateCodeError(DuplicateKeyError):
    def __init__(self, code: str):
        super().__init__("code", code, f"Part code '{code}' already exists")


class DuplicateAssignmentError(DuplicateKeyError):
    def __init__(self, vehicle_id: int, part_id: int):
        self.vehicle_id = vehicle_id
        self.part_id = part_id
        super().__init__(
            "vehicle_id,part_id",
            (vehicle_id, part_id),
            f"Part {part_id} is already assigned to vehicle {vehicle_id}",
        )


class StorageError(AutoCicloError):
    """
    Any failure reported by the database engine: unanticipated constraint
    violation, disk/IO error, malformed SQL. Carries the statement and
    parameters that failed plus the original engine exception.
    """

    def __init__(self, message: str, statement: Optional[str] = None,
                 params: Any = None, original: Optional[BaseException] = None):
        self.statement = statement
        self.params = params
        self.original = original
        super().__init__(message)
