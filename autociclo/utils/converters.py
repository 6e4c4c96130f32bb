# autociclo/utils/converters.py
"""
Form <-> entity conversion.

Forms carry every field as text. Converting a form back to an entity parses
each field: blank numbers take the documented default, blank dates become
today, blank optional text becomes None. Anything non-blank that does not
parse, or that the schema rejects, raises ValidationError with every bad
field listed. Nothing is silently coerced to a default.

Blank-field defaults:
    vehicle  year -> current year, purchase_price -> 0, mileage -> 0
    part     sale_price -> 0, available_stock -> 0, minimum_stock -> 1
    assignment  quantity -> 1, unit_price -> 0
"""

import math
import re
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

import pydantic

from autociclo.exceptions import ValidationError
from autociclo.schemas.common import PART_CODE_PATTERN, PLATE_PATTERN
from autociclo.schemas.inventory import AssignmentCreate, AssignmentForm
from autociclo.schemas.part import PartBase, PartCreate, PartForm
from autociclo.schemas.vehicle import VehicleBase, VehicleCreate, VehicleForm

_PLATE_RE = re.compile(PLATE_PATTERN)
_PART_CODE_RE = re.compile(PART_CODE_PATTERN)


def format_plate(value: str) -> str:
    """
    Mechanical plate clean-up: drop non-alphanumerics, uppercase, keep the
    4-character block plus the next 3. No padding, no letter/digit checks.
    """
    clean = re.sub(r"[^0-9A-Z]", "", (value or "").upper())
    if len(clean) <= 4:
        return clean
    return clean[:4] + clean[4:7]


def is_valid_plate(value: str) -> bool:
    return bool(_PLATE_RE.match(value or ""))


def is_valid_part_code(value: str) -> bool:
    return bool(_PART_CODE_RE.match(value or ""))


class _FieldParser:
    """Collects per-field parse errors so one ValidationError reports them all."""

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def integer(self, field: str, raw: str, default: Optional[int]) -> Optional[int]:
        raw = (raw or "").strip()
        if not raw:
            if default is None:
                self.errors[field] = "is required"
            return default
        try:
            return int(raw)
        except ValueError:
            self.errors[field] = f"'{raw}' is not a whole number"
            return default

    def decimal(self, field: str, raw: str, default: float) -> float:
        raw = (raw or "").strip()
        if not raw:
            return default
        try:
            value = float(raw.replace(",", "."))
        except ValueError:
            value = None
        if value is None or not math.isfinite(value):
            self.errors[field] = f"'{raw}' is not a number"
            return default
        return value

    def day(self, field: str, raw: str) -> date:
        raw = (raw or "").strip()
        if not raw:
            return date.today()
        try:
            return date.fromisoformat(raw)
        except ValueError:
            self.errors[field] = f"'{raw}' is not a YYYY-MM-DD date"
            return date.today()

    def build(self, schema, values: Dict[str, Any]):
        if self.errors:
            raise ValidationError(self.errors)
        try:
            return schema(**values)
        except pydantic.ValidationError as e:
            raise ValidationError({
                ".".join(str(loc) for loc in err["loc"]): err["msg"] for err in e.errors()
            }) from e


def _optional(raw: str) -> Optional[str]:
    raw = (raw or "").strip()
    return raw or None


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return "" if value is None else str(value)


# ── Vehicles ──────────────────────────────────────────────────────────────

def form_to_vehicle(form: VehicleForm) -> VehicleCreate:
    parser = _FieldParser()
    values = {
        "plate": form.plate.strip().upper(),
        "make": form.make.strip(),
        "model": form.model.strip(),
        "year": parser.integer("year", form.year, date.today().year),
        "color": _optional(form.color),
        "entry_date": parser.day("entry_date", form.entry_date),
        "status": form.status,
        "purchase_price": parser.decimal("purchase_price", form.purchase_price, 0.0),
        "mileage": parser.integer("mileage", form.mileage, 0),
        "gps_location": _optional(form.gps_location),
        "notes": _optional(form.notes),
    }
    return parser.build(VehicleCreate, values)


def vehicle_to_form(vehicle: VehicleBase) -> VehicleForm:
    return VehicleForm(
        plate=_text(getattr(vehicle, "plate", "")),
        make=vehicle.make,
        model=vehicle.model,
        year=str(vehicle.year),
        color=_text(vehicle.color),
        entry_date=vehicle.entry_date.isoformat(),
        status=_text(vehicle.status),
        purchase_price=str(vehicle.purchase_price),
        mileage=str(vehicle.mileage),
        gps_location=_text(vehicle.gps_location),
        notes=_text(vehicle.notes),
    )


# ── Parts ─────────────────────────────────────────────────────────────────

def form_to_part(form: PartForm) -> PartCreate:
    parser = _FieldParser()
    values = {
        "code": form.code.strip().upper(),
        "name": form.name.strip(),
        "category": form.category,
        "sale_price": parser.decimal("sale_price", form.sale_price, 0.0),
        "available_stock": parser.integer("available_stock", form.available_stock, 0),
        "minimum_stock": parser.integer("minimum_stock", form.minimum_stock, 1),
        "storage_location": _optional(form.storage_location),
        "compatible_makes": _optional(form.compatible_makes),
        "image": _optional(form.image),
        "description": _optional(form.description),
    }
    return parser.build(PartCreate, values)


def part_to_form(part: PartBase) -> PartForm:
    return PartForm(
        code=_text(getattr(part, "code", "")),
        name=part.name,
        category=_text(part.category),
        sale_price=str(part.sale_price),
        available_stock=str(part.available_stock),
        minimum_stock=str(part.minimum_stock),
        storage_location=_text(part.storage_location),
        compatible_makes=_text(part.compatible_makes),
        image=_text(part.image),
        description=_text(part.description),
    )


# ── Assignments ───────────────────────────────────────────────────────────

def form_to_assignment(form: AssignmentForm) -> AssignmentCreate:
    parser = _FieldParser()
    values = {
        "vehicle_id": parser.integer("vehicle_id", form.vehicle_id, None),
        "part_id": parser.integer("part_id", form.part_id, None),
        "quantity": parser.integer("quantity", form.quantity, 1),
        "condition": form.condition,
        "extraction_date": parser.day("extraction_date", form.extraction_date),
        "unit_price": parser.decimal("unit_price", form.unit_price, 0.0),
        "notes": _optional(form.notes),
    }
    return parser.build(AssignmentCreate, values)


def assignment_to_form(assignment: AssignmentCreate) -> AssignmentForm:
    return AssignmentForm(
        vehicle_id=str(assignment.vehicle_id),
        part_id=str(assignment.part_id),
        quantity=str(assignment.quantity),
        condition=_text(assignment.condition),
        extraction_date=assignment.extraction_date.isoformat(),
        unit_price=str(assignment.unit_price),
        notes=_text(assignment.notes),
    )
