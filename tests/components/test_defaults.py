"""Config defaulting and merge unit tests"""

import pytest

from hoteldesk.components.defaults import config_to_json, get_default_config, merge_config
from hoteldesk.components.descriptors import ComponentConfig, FieldDescriptor
from hoteldesk.enums import ComponentType, FieldKind

ACTION_KEYS = {"create", "edit", "delete", "view", "export"}


@pytest.mark.parametrize("component_type", list(ComponentType))
def test_default_templates_share_page_size_and_actions(component_type):
    config = get_default_config(component_type)

    assert config.page_size == 10
    assert set(config.actions.model_dump()) == ACTION_KEYS
    assert all(config.actions.model_dump().values())


def test_form_default_fields():
    config = get_default_config("form")

    assert [f.key for f in config.fields] == ["nom", "email", "description", "actif"]
    assert [f.kind for f in config.fields] == [
        FieldKind.TEXT,
        FieldKind.EMAIL,
        FieldKind.TEXTAREA,
        FieldKind.SWITCH,
    ]
    assert config.columns == []


def test_table_and_list_default_columns():
    table = get_default_config(ComponentType.TABLE)
    listing = get_default_config(ComponentType.LIST)

    assert [c.key for c in table.columns] == ["id", "nom", "statut", "date"]
    assert [c.key for c in listing.columns] == ["id", "nom", "statut", "date"]
    assert table.columns[0].sortable is True
    assert listing.columns[0].sortable is False


def test_unknown_type_yields_empty_config():
    config = get_default_config("calendar")

    assert config.fields == []
    assert config.columns == []
    assert config.page_size == 10


def test_default_config_is_a_fresh_copy():
    first = get_default_config("settings")
    first.fields.append(FieldDescriptor(key="extra"))

    second = get_default_config("settings")

    assert [f.key for f in second.fields] == ["option1", "option2"]


def test_merge_action_flags_union_with_defaults():
    config = merge_config("form", {"actions": {"delete": False}})

    assert config.actions.create is True
    assert config.actions.edit is True
    assert config.actions.delete is False
    assert config.actions.view is True
    assert config.actions.export is True
    assert config.fields == get_default_config("form").fields


@pytest.mark.parametrize("component_type", list(ComponentType))
@pytest.mark.parametrize(
    "stored",
    [
        None,
        {},
        {"actions": {"export": False, "view": False}},
        {"title": "Réservations", "pageSize": 25},
        {"fields": [], "columns": []},
    ],
)
def test_merge_keeps_all_actions_and_stored_flags(component_type, stored):
    config = merge_config(component_type, stored)

    actions = config.actions.model_dump()
    assert set(actions) == ACTION_KEYS
    assert all(isinstance(v, bool) for v in actions.values())
    for key, value in ((stored or {}).get("actions") or {}).items():
        assert actions[key] is value


def test_merge_replaces_top_level_keys_wholesale():
    stored = {"columns": [{"key": "chambre", "label": "Chambre", "type": "number"}]}

    config = merge_config("table", stored)

    assert [c.key for c in config.columns] == ["chambre"]


def test_merge_accepts_attribute_names():
    config = merge_config("list", {"page_size": 5})

    assert config.page_size == 5


def test_merge_discards_invalid_keys_only():
    config = merge_config("table", {"pageSize": 0, "fields": None, "title": "Chambres"})

    assert config.page_size == 10
    assert config.fields == []
    assert config.title == "Chambres"


def test_merge_keeps_valid_field_entries():
    stored = {
        "fields": [
            {"key": "chambre", "type": "text", "required": True},
            {"key": "age", "type": "number", "min": ""},
            {"key": "note", "label": None, "minLength": "long"},
        ]
    }

    config = merge_config("form", stored)

    assert [f.key for f in config.fields] == ["chambre", "age", "note"]
    assert config.fields[0].required is True
    assert config.fields[1].kind == FieldKind.NUMBER
    assert config.fields[1].min is None
    assert config.fields[2].label == "note"
    assert config.fields[2].min_length is None


def test_merge_drops_field_entries_without_key():
    stored = {"fields": [{"label": "Sans clé"}, "chambre", {"key": "chambre", "label": "Chambre"}]}

    config = merge_config("form", stored)

    assert [f.key for f in config.fields] == ["chambre"]


def test_merge_keeps_valid_column_entries():
    stored = {
        "columns": [
            {"key": "chambre", "label": None, "type": "number", "sortable": True},
            {"key": "statut", "type": "badge", "badgeVariants": ["Actif"]},
            {"key": "", "label": "Vide"},
        ]
    }

    config = merge_config("table", stored)

    assert [c.key for c in config.columns] == ["chambre", "statut"]
    assert config.columns[0].label == "chambre"
    assert config.columns[0].sortable is True
    assert config.columns[1].badge_variants == {}


def test_merge_repairs_only_invalid_action_flags():
    config = merge_config("table", {"actions": {"delete": False, "view": "peut-etre"}})

    assert config.actions.delete is False
    assert config.actions.view is True
    assert set(config.actions.model_dump()) == ACTION_KEYS


def test_merge_repair_leaves_stored_config_untouched():
    stored = {"fields": [{"key": "age", "type": "number", "min": ""}]}

    merge_config("form", stored)

    assert stored == {"fields": [{"key": "age", "type": "number", "min": ""}]}


def test_merge_ignores_non_mapping_config():
    config = merge_config("form", ["not", "a", "config"])

    assert config == get_default_config("form")


def test_merge_ignores_non_mapping_actions():
    config = merge_config("form", {"actions": "none"})

    assert config.actions.delete is True


@pytest.mark.parametrize("component_type", list(ComponentType))
@pytest.mark.parametrize(
    "stored",
    [
        None,
        {"actions": {"delete": False}},
        {"title": "Stock", "pageSize": 3, "actions": {"create": False}},
        {"pageSize": -4},
    ],
)
def test_merge_is_idempotent(component_type, stored):
    once = merge_config(component_type, stored)

    assert merge_config(component_type, once) == once
    assert merge_config(component_type, config_to_json(once)) == once


def test_merge_never_returns_shared_objects():
    first = merge_config("form")
    first.fields[0].label = "Changed"

    assert merge_config("form").fields[0].label == "Nom"


def test_merge_with_component_config_counts_only_set_keys():
    stored = ComponentConfig(title="Clients")

    config = merge_config("table", stored)

    assert config.title == "Clients"
    assert [c.key for c in config.columns] == ["id", "nom", "statut", "date"]
