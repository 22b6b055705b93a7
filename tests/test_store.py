"""Module store tests on a temporary SQLite database"""

from datetime import date

import pytest

from hoteldesk.errors import ConflictException, NotFoundException
from hoteldesk.store import ModuleStore


@pytest.fixture
def store(db):
    return ModuleStore()


@pytest.fixture
def reception(store):
    module = store.create_module("RECEPTION", "Réception", start_date=date(2026, 1, 1))
    sous_module = store.create_sous_module(module.id, "GUEST_LIST", "Clients")
    return module, sous_module


def test_create_and_list_modules(store):
    store.create_module("RECEPTION", "Réception")
    store.create_module("RESTAURANT", "Restaurant")

    assert [m.code for m in store.list_modules()] == ["RECEPTION", "RESTAURANT"]


def test_duplicate_module_code_conflicts(store):
    store.create_module("RECEPTION", "Réception")

    with pytest.raises(ConflictException):
        store.create_module("RECEPTION", "Autre")


def test_update_module(store, reception):
    module, _ = reception

    updated = store.update_module(module.id, label="Accueil", end_date=date(2026, 12, 31))

    assert updated.label == "Accueil"
    assert store.get_module(module.id).end_date == date(2026, 12, 31)
    with pytest.raises(ValueError):
        store.update_module(module.id, owner="nobody")


def test_missing_rows_raise_not_found(store):
    with pytest.raises(NotFoundException):
        store.get_module(999)
    with pytest.raises(NotFoundException):
        store.create_sous_module(999, "X", "X")
    with pytest.raises(NotFoundException):
        store.get_event(999)


def test_create_event_defaults_to_form(store, reception):
    _, sous_module = reception

    event = store.create_event(sous_module.id, "NEW_GUEST", "Nouveau client", component_type=None)

    assert event.component_type == "form"
    assert event.config is None
    assert event.active is True
    assert store.get_event_parent(event.id).code == "GUEST_LIST"


def test_unknown_component_type_is_stored_as_given(store, reception):
    _, sous_module = reception

    event = store.create_event(sous_module.id, "PLAN", "Plan", component_type="floorplan")

    assert event.component_type == "floorplan"
    assert event.parsed_type is None


def test_save_event_config_is_verbatim(store, reception):
    _, sous_module = reception
    event = store.create_event(sous_module.id, "GUESTS", "Clients", component_type="table")
    config = {"pageSize": 0, "legacy": {"nested": [1, 2]}, "actions": {"delete": False}}

    store.save_event_config(event.id, config)

    assert store.get_event(event.id).config == config


def test_last_write_wins(store, reception):
    _, sous_module = reception
    event = store.create_event(sous_module.id, "GUESTS", "Clients", component_type="table")

    store.save_event_config(event.id, {"title": "A"})
    store.save_event_config(event.id, {"title": "B"})

    assert store.get_event(event.id).config == {"title": "B"}


def test_update_event(store, reception):
    _, sous_module = reception
    event = store.create_event(sous_module.id, "GUESTS", "Clients")

    updated = store.update_event(event.id, component_type="LIST", active=False)

    assert updated.component_type == "LIST"
    assert updated.parsed_type.value == "list"
    assert updated.active is False


def test_delete_module_cascades(store, reception):
    module, sous_module = reception
    event = store.create_event(sous_module.id, "GUESTS", "Clients")

    store.delete_module(module.id)

    assert store.list_modules() == []
    with pytest.raises(NotFoundException):
        store.get_sous_module(sous_module.id)
    with pytest.raises(NotFoundException):
        store.get_event(event.id)


def test_delete_event(store, reception):
    _, sous_module = reception
    event = store.create_event(sous_module.id, "GUESTS", "Clients")

    store.delete_event(event.id)

    assert store.list_events(sous_module.id) == []


def test_hierarchy(store, reception):
    module, sous_module = reception
    store.create_event(sous_module.id, "GUESTS", "Clients", component_type="table")
    store.create_module("EMPTY", "Vide")

    tree = store.hierarchy()

    assert [m["code"] for m in tree] == ["RECEPTION", "EMPTY"]
    assert tree[0]["start_date"] == date(2026, 1, 1)
    assert [s["code"] for s in tree[0]["sous_modules"]] == ["GUEST_LIST"]
    assert [e["code"] for e in tree[0]["sous_modules"][0]["events"]] == ["GUESTS"]
    assert tree[1]["sous_modules"] == []
