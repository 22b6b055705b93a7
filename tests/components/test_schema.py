"""Validation schema synthesizer unit tests"""

from datetime import date

import pytest

from hoteldesk.components.defaults import get_default_config
from hoteldesk.components.descriptors import FieldDescriptor
from hoteldesk.components.schema import REQUIRED_MESSAGE, build_defaults, build_schema
from hoteldesk.errors import FormValidationError


@pytest.fixture
def age_schema():
    return build_schema(
        [FieldDescriptor(key="age", kind="number", min=18, max=99, required=True)]
    )


def test_number_bounds_accept_limits(age_schema):
    assert age_schema.validate({"age": 18}) == {"age": 18}
    assert age_schema.validate({"age": 99}) == {"age": 99}


def test_number_above_max_is_rejected(age_schema):
    with pytest.raises(FormValidationError) as exc_info:
        age_schema.validate({"age": 150})

    assert list(exc_info.value.errors) == ["age"]


def test_missing_required_number_is_rejected(age_schema):
    assert age_schema.check({}) == {"age": REQUIRED_MESSAGE}
    assert age_schema.check({"age": None}) == {"age": REQUIRED_MESSAGE}


def test_number_is_coerced_from_string(age_schema):
    assert age_schema.validate({"age": "42"}) == {"age": 42.0}


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_number_rejects_nan_and_inf(value):
    schema = build_schema([FieldDescriptor(key="prix", kind="number")])

    assert "prix" in schema.check({"prix": value})


def test_email_field():
    schema = build_schema([FieldDescriptor(key="email", kind="email", required=True)])

    assert schema.validate({"email": "guest@hotel-dupont.fr"}) == {"email": "guest@hotel-dupont.fr"}
    assert "email" in schema.check({"email": "not-an-email"})


def test_optional_fields_accept_empty_values():
    schema = build_schema(
        [
            FieldDescriptor(key="email", kind="email"),
            FieldDescriptor(key="note", kind="textarea", min_length=3),
        ]
    )

    assert schema.validate({"email": "", "note": None}) == {}


def test_boolean_fields_are_never_optional():
    schema = build_schema([FieldDescriptor(key="actif", kind="switch")])

    assert schema.check({}) == {"actif": REQUIRED_MESSAGE}
    assert schema.validate({"actif": False}) == {"actif": False}


def test_string_length_and_pattern():
    schema = build_schema(
        [
            FieldDescriptor(
                key="chambre", min_length=3, max_length=4, pattern=r"^[A-Z]\d+$", required=True
            )
        ]
    )

    assert schema.validate({"chambre": "B204"}) == {"chambre": "B204"}
    assert "chambre" in schema.check({"chambre": "B2"})
    assert "chambre" in schema.check({"chambre": "B20456"})
    assert "chambre" in schema.check({"chambre": "b204"})


def test_invalid_pattern_is_ignored():
    schema = build_schema([FieldDescriptor(key="code", pattern="([unclosed")])

    assert schema.validate({"code": "anything"}) == {"code": "anything"}


def test_validation_is_all_or_nothing():
    schema = build_schema(
        [
            FieldDescriptor(key="nom", label="Nom", required=True),
            FieldDescriptor(key="email", label="Email", kind="email", required=True),
        ]
    )

    with pytest.raises(FormValidationError) as exc_info:
        schema.validate({"nom": "Dupont", "email": "bad"})

    errors = exc_info.value.field_errors
    assert [e.key for e in errors] == ["email"]
    assert errors[0].label == "Email"


def test_unknown_input_keys_are_dropped():
    schema = build_schema([FieldDescriptor(key="nom")])

    assert schema.validate({"nom": "Dupont", "admin": True}) == {"nom": "Dupont"}


def test_duplicate_keys_keep_last_definition():
    schema = build_schema(
        [FieldDescriptor(key="x", kind="number"), FieldDescriptor(key="x", kind="text")]
    )

    assert schema.keys == ["x"]
    assert schema.validate({"x": "abc"}) == {"x": "abc"}


def test_build_defaults_per_kind():
    fields = [
        FieldDescriptor(key="actif", kind="switch"),
        FieldDescriptor(key="ok", kind="checkbox"),
        FieldDescriptor(key="nuits", kind="number", min=1),
        FieldDescriptor(key="total", kind="number"),
        FieldDescriptor(key="arrivee", kind="date"),
        FieldDescriptor(key="nom"),
    ]

    defaults = build_defaults(fields, today=date(2026, 3, 14))

    assert defaults == {
        "actif": False,
        "ok": False,
        "nuits": 1,
        "total": 0,
        "arrivee": "2026-03-14",
        "nom": "",
    }


@pytest.mark.parametrize(
    "fields",
    [
        get_default_config("settings").fields,
        [
            FieldDescriptor(key="nuits", kind="number", min=1, max=30, required=True),
            FieldDescriptor(key="arrivee", kind="date", required=True),
            FieldDescriptor(key="chambre", kind="select"),
            FieldDescriptor(key="email", kind="email"),
            FieldDescriptor(key="actif", kind="checkbox"),
            FieldDescriptor(key="note", kind="textarea", max_length=200),
        ],
    ],
)
def test_defaults_satisfy_their_schema(fields):
    schema = build_schema(fields)

    assert schema.check(build_defaults(fields)) == {}
