"""
Schema-driven input validation.

Supports the minimal schema dialect used by the action schemas: top-level
``required`` and ``properties`` with per-field ``type`` and ``enum``. A schema
that cannot be loaded validates every input; the protocol stays available
with an incomplete schema deployment.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """Declared constraints for one input field."""

    type_name: ClassVar[Optional[str]] = None
    type_label: ClassVar[str] = "a value"

    enum: Optional[Tuple[Any, ...]] = None

    def matches_type(self, value: Any) -> bool:
        return True


class StringField(FieldSpec):
    type_name = "string"
    type_label = "a string"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, str)


class NumberField(FieldSpec):
    type_name = "number"
    type_label = "a number"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


class BooleanField(FieldSpec):
    type_name = "boolean"
    type_label = "a boolean"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, bool)


class ArrayField(FieldSpec):
    type_name = "array"
    type_label = "an array"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, list)


class ObjectField(FieldSpec):
    type_name = "object"
    type_label = "an object"

    def matches_type(self, value: Any) -> bool:
        return isinstance(value, dict)


# Fields without a type, or with a type outside the dialect, only get enum checks.
class UntypedField(FieldSpec):
    pass


FIELD_TYPES: Dict[str, Type[FieldSpec]] = {
    cls.type_name: cls
    for cls in (StringField, NumberField, BooleanField, ArrayField, ObjectField)
}


def parse_field_spec(raw: Any) -> FieldSpec:
    if not isinstance(raw, dict):
        return UntypedField()
    enum = raw.get("enum")
    field_cls = FIELD_TYPES.get(raw.get("type"), UntypedField)
    return field_cls(enum=tuple(enum) if isinstance(enum, list) else None)


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed schema: required field names and per-field specs."""

    required: Tuple[str, ...] = ()
    properties: Dict[str, FieldSpec] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Any) -> "SchemaDocument":
        if not isinstance(raw, dict):
            return cls()
        required = raw.get("required")
        properties = raw.get("properties")
        return cls(
            required=tuple(name for name in required if isinstance(name, str))
            if isinstance(required, list) else (),
            properties={
                name: parse_field_spec(spec) for name, spec in properties.items()
            } if isinstance(properties, dict) else {},
        )


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, errors: List[str]) -> "ValidationResult":
        return cls(valid=False, errors=tuple(errors))


def _same_value(left: Any, right: Any) -> bool:
    # JSON true/false never equal 1/0.
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def _display(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def check_field(value: Any, field_name: str, spec: FieldSpec, errors: List[str]) -> None:
    """Enum first; a value outside the enumeration skips the type check."""
    if spec.enum is not None and not any(_same_value(value, option) for option in spec.enum):
        options = ", ".join(_display(option) for option in spec.enum)
        errors.append(f"'{field_name}' must be one of: {options}")
        return

    if not spec.matches_type(value):
        errors.append(f"'{field_name}' must be {spec.type_label}")


def validate_document(schema: SchemaDocument, data: Mapping[str, Any]) -> ValidationResult:
    errors: List[str] = []

    for name in schema.required:
        value = data.get(name)
        if value is None or value == "":
            errors.append(f"Required field '{name}' is missing or empty")

    for name, spec in schema.properties.items():
        if name in data:
            check_field(data[name], name, spec, errors)

    if errors:
        return ValidationResult.failed(errors)
    return ValidationResult.passed()


class SchemaValidator:
    """Loads schema documents from disk and validates inputs against them."""

    def __init__(self, schema_root: Path, cache_schemas: bool = False):
        self.schema_root = Path(schema_root).resolve()
        self.cache_schemas = cache_schemas
        self._cache: Dict[Path, SchemaDocument] = {}

    def _resolve(self, schema_path: str) -> Optional[Path]:
        full = (self.schema_root / schema_path).resolve()
        if not full.is_relative_to(self.schema_root):
            return None
        return full

    def load(self, schema_path: str) -> Optional[SchemaDocument]:
        """Return the parsed schema, or None when it cannot be loaded."""
        full = self._resolve(schema_path)
        if full is None:
            logger.warning("Schema unavailable, validation skipped", schema_path=schema_path, reason="outside schema root")
            return None

        if self.cache_schemas and full in self._cache:
            return self._cache[full]

        try:
            raw = json.loads(full.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Schema unavailable, validation skipped", schema_path=schema_path, reason=type(e).__name__)
            return None

        document = SchemaDocument.from_json(raw)
        if self.cache_schemas:
            self._cache[full] = document
        return document

    def validate(self, schema_path: str, data: Mapping[str, Any]) -> ValidationResult:
        schema = self.load(schema_path)
        if schema is None:
            return ValidationResult.passed()
        return validate_document(schema, data)
