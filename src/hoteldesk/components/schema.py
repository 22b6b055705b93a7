"""Runtime validation schemas synthesized from field descriptors.

Each field maps to one immutable rule selected by its kind. Validators are
pydantic ``TypeAdapter`` instances cached by the constraints they honor, so
rebuilding a schema after every edit in the settings UI only costs a lookup
per field.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Annotated, Any, Iterable, Mapping, Optional

from pydantic import AfterValidator, EmailStr, Field, StringConstraints, TypeAdapter, ValidationError

from ..consts import SCHEMA_CACHE_SIZE
from ..enums import FieldKind
from ..errors import FieldError, FormValidationError
from ..utils import today as current_date
from .descriptors import FieldDescriptor

logger = logging.getLogger(__name__)

BOOLEAN_KINDS = frozenset({FieldKind.SWITCH, FieldKind.CHECKBOX})

REQUIRED_MESSAGE = "Field required"


@lru_cache(maxsize=SCHEMA_CACHE_SIZE)
def _number_adapter(minimum: Optional[float], maximum: Optional[float]) -> TypeAdapter:
    return TypeAdapter(Annotated[float, Field(ge=minimum, le=maximum, allow_inf_nan=False)])


@lru_cache(maxsize=1)
def _email_adapter() -> TypeAdapter:
    return TypeAdapter(EmailStr)


@lru_cache(maxsize=1)
def _boolean_adapter() -> TypeAdapter:
    return TypeAdapter(bool)


def _pattern_validator(pattern: str):
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        logger.warning(f"Ignoring invalid pattern {pattern!r}: {e}")
        return None

    def check(value: str) -> str:
        if not compiled.search(value):
            raise ValueError(f"String should match pattern '{pattern}'")
        return value

    return AfterValidator(check)


@lru_cache(maxsize=SCHEMA_CACHE_SIZE)
def _string_adapter(
    min_length: Optional[int], max_length: Optional[int], pattern: Optional[str]
) -> TypeAdapter:
    metadata: list[Any] = [StringConstraints(min_length=min_length, max_length=max_length)]
    if pattern:
        validator = _pattern_validator(pattern)
        if validator is not None:
            metadata.append(validator)
    return TypeAdapter(Annotated[(str, *metadata)])


@dataclass(frozen=True)
class FieldRule:
    key: str
    label: str
    kind: FieldKind
    optional: bool
    adapter: TypeAdapter = field(repr=False, compare=False)

    def is_missing(self, value: Any) -> bool:
        if value is None:
            return True
        return self.optional and isinstance(value, str) and not value.strip()

    def clean(self, value: Any) -> Any:
        return self.adapter.validate_python(value)


def build_rule(descriptor: FieldDescriptor) -> FieldRule:
    match descriptor.kind:
        case FieldKind.NUMBER:
            adapter = _number_adapter(descriptor.min, descriptor.max)
        case FieldKind.EMAIL:
            adapter = _email_adapter()
        case FieldKind.SWITCH | FieldKind.CHECKBOX:
            adapter = _boolean_adapter()
        case _:
            adapter = _string_adapter(
                descriptor.min_length, descriptor.max_length, descriptor.pattern
            )

    return FieldRule(
        key=descriptor.key,
        label=descriptor.label,
        kind=descriptor.kind,
        optional=not descriptor.required and descriptor.kind not in BOOLEAN_KINDS,
        adapter=adapter,
    )


@dataclass(frozen=True)
class FormSchema:
    rules: tuple[FieldRule, ...]

    @property
    def keys(self) -> list[str]:
        return [rule.key for rule in self.rules]

    def _run(self, data: Mapping[str, Any] | None) -> tuple[dict[str, Any], list[FieldError]]:
        data = data or {}
        cleaned: dict[str, Any] = {}
        errors: list[FieldError] = []

        for rule in self.rules:
            value = data.get(rule.key)
            if rule.is_missing(value):
                if not rule.optional:
                    errors.append(FieldError(rule.key, rule.label, REQUIRED_MESSAGE))
                continue

            try:
                cleaned[rule.key] = rule.clean(value)
            except ValidationError as e:
                first = e.errors()[0]
                errors.append(FieldError(rule.key, rule.label, first.get("msg", str(e))))

        return cleaned, errors

    def check(self, data: Mapping[str, Any] | None) -> dict[str, str]:
        """Return ``{key: message}`` for every invalid field (empty when valid)."""
        _, errors = self._run(data)
        return {e.key: e.message for e in errors}

    def validate(self, data: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate a submission as a whole.

        Returns the cleaned values for the known keys, or raises
        ``FormValidationError`` listing every offending field. Nothing is
        returned for a partially valid submission.
        """
        cleaned, errors = self._run(data)
        if errors:
            raise FormValidationError(errors)
        return cleaned


def build_schema(fields: Iterable[FieldDescriptor]) -> FormSchema:
    rules: dict[str, FieldRule] = {}
    for descriptor in fields:
        if descriptor.key in rules:
            logger.warning(f"Duplicate field key '{descriptor.key}', last definition wins")
        rules[descriptor.key] = build_rule(descriptor)
    return FormSchema(rules=tuple(rules.values()))


def default_value(descriptor: FieldDescriptor, today: date | None = None) -> Any:
    match descriptor.kind:
        case FieldKind.SWITCH | FieldKind.CHECKBOX:
            return False
        case FieldKind.NUMBER:
            return descriptor.min if descriptor.min is not None else 0
        case FieldKind.DATE:
            return (today or current_date()).isoformat()
        case _:
            return ""


def build_defaults(
    fields: Iterable[FieldDescriptor], today: date | None = None
) -> dict[str, Any]:
    return {descriptor.key: default_value(descriptor, today) for descriptor in fields}
