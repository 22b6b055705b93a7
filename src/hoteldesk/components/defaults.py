"""Built-in component templates and the stored-config merge rule."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from ..enums import ComponentType
from .descriptors import ColumnDescriptor, ComponentConfig, Descriptor, FieldDescriptor

logger = logging.getLogger(__name__)

ALL_ACTIONS = {"create": True, "edit": True, "delete": True, "view": True, "export": True}

# Keys merged key-by-key; every other top-level key is replaced wholesale.
UNION_MERGED_KEYS = frozenset({"actions"})

# List keys repaired entry by entry.
ENTRY_MODELS: dict[str, type[Descriptor]] = {"fields": FieldDescriptor, "columns": ColumnDescriptor}

MAX_REPAIR_PASSES = 3

_TEMPLATES: dict[ComponentType, dict[str, Any]] = {
    ComponentType.TABLE: {
        "columns": [
            {"key": "id", "label": "ID", "type": "text", "sortable": True},
            {"key": "nom", "label": "Nom", "type": "text", "sortable": True, "filterable": True},
            {
                "key": "statut",
                "label": "Statut",
                "type": "badge",
                "badgeVariants": {"Actif": "default", "Inactif": "secondary"},
            },
            {"key": "date", "label": "Date", "type": "date", "sortable": True},
        ],
        "fields": [],
        "pageSize": 10,
        "actions": ALL_ACTIONS,
    },
    ComponentType.LIST: {
        "columns": [
            {"key": "id", "label": "ID", "type": "text"},
            {"key": "nom", "label": "Nom", "type": "text", "filterable": True},
            {"key": "statut", "label": "Statut", "type": "badge"},
            {"key": "date", "label": "Date", "type": "date"},
        ],
        "fields": [],
        "pageSize": 10,
        "actions": ALL_ACTIONS,
    },
    ComponentType.FORM: {
        "fields": [
            {
                "key": "nom",
                "label": "Nom",
                "type": "text",
                "required": True,
                "placeholder": "Entrez le nom",
            },
            {
                "key": "email",
                "label": "Email",
                "type": "email",
                "required": True,
                "placeholder": "email@exemple.com",
            },
            {
                "key": "description",
                "label": "Description",
                "type": "textarea",
                "placeholder": "Description...",
            },
            {"key": "actif", "label": "Actif", "type": "switch"},
        ],
        "columns": [],
        "pageSize": 10,
        "actions": ALL_ACTIONS,
    },
    ComponentType.DASHBOARD: {
        "title": "Tableau de bord",
        "description": "Vue d'ensemble des données",
        "fields": [],
        "columns": [],
        "pageSize": 10,
        "actions": ALL_ACTIONS,
    },
    ComponentType.SETTINGS: {
        "title": "Paramètres",
        "description": "Configuration du module",
        "fields": [
            {"key": "option1", "label": "Option 1", "type": "switch"},
            {"key": "option2", "label": "Option 2", "type": "text"},
        ],
        "columns": [],
        "pageSize": 10,
        "actions": ALL_ACTIONS,
    },
}


def _template(component_type: ComponentType | str | None) -> dict[str, Any]:
    ctype = ComponentType.parse(component_type)
    if ctype is None:
        logger.warning(f"No default config for component type {component_type!r}")
        return {}
    return copy.deepcopy(_TEMPLATES[ctype])


def get_default_config(component_type: ComponentType | str | None) -> ComponentConfig:
    """Return a fresh copy of the built-in config for a component type."""
    return ComponentConfig.model_validate(_template(component_type))


def _aliases() -> dict[str, str]:
    return {name: info.alias or name for name, info in ComponentConfig.model_fields.items()}


def _canonical_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map attribute names (``page_size``) to their stored aliases (``pageSize``)."""
    aliases = _aliases()
    return {aliases.get(key, key): value for key, value in data.items()}


def _as_overlay(stored: Any) -> dict[str, Any]:
    if stored is None:
        return {}
    if isinstance(stored, ComponentConfig):
        return stored.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(stored, Mapping):
        return _canonical_keys(stored)

    logger.warning(f"Ignoring stored config of type {type(stored).__name__}, using defaults")
    return {}


def _merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        if key in UNION_MERGED_KEYS:
            if isinstance(value, Mapping):
                merged[key] = {**base.get(key, {}), **value}
            else:
                logger.warning(f"Ignoring stored '{key}': expected an object, got {value!r}")
        else:
            merged[key] = value
    return merged


def _attribute_names(model: type[Descriptor], name: Any) -> set[str]:
    """Every spelling (attribute name and alias) of the attribute ``name``."""
    for attr, info in model.model_fields.items():
        if name in (attr, info.alias):
            return {attr, info.alias or attr}
    return {name}


def _repair_entry(container: str, entries: list, loc: tuple, dropped: set[int]) -> None:
    index = loc[1] if len(loc) > 1 else None
    if not isinstance(index, int) or index in dropped:
        return

    entry = entries[index]
    attr = loc[2] if len(loc) > 2 else None
    if attr is None or attr == "key" or not isinstance(entry, dict):
        logger.warning(f"Dropping invalid stored {container}[{index}]")
        dropped.add(index)
        return

    logger.warning(f"Ignoring invalid '{attr}' on stored {container}[{index}]")
    for name in _attribute_names(ENTRY_MODELS[container], attr):
        entry.pop(name, None)


def _repair(merged: dict[str, Any], base: dict[str, Any], errors: list[dict]) -> dict[str, Any]:
    """Return a copy of ``merged`` with the values behind ``errors`` removed.

    Bad entries of ``fields``/``columns`` lose the offending attribute, or the
    whole entry when it has no usable ``key``; a bad action flag falls back to
    its default. Any other bad key is replaced by the default value.
    """
    aliases = _aliases()
    repaired = copy.deepcopy(merged)
    dropped: dict[str, set[int]] = {container: set() for container in ENTRY_MODELS}

    for error in errors:
        loc = tuple(error.get("loc") or ())
        if not loc:
            continue
        key = aliases.get(loc[0], loc[0])

        if key in ENTRY_MODELS and len(loc) > 1 and isinstance(repaired.get(key), list):
            _repair_entry(key, repaired[key], loc, dropped[key])
        elif key in UNION_MERGED_KEYS and len(loc) > 1 and isinstance(repaired.get(key), dict):
            flag = loc[1]
            logger.warning(f"Ignoring invalid stored '{key}.{flag}'")
            repaired[key].pop(flag, None)
            if flag in base.get(key, {}):
                repaired[key][flag] = base[key][flag]
        else:
            logger.warning(f"Discarding invalid stored config key '{key}'")
            if key in base:
                repaired[key] = copy.deepcopy(base[key])
            else:
                repaired.pop(key, None)

    for container, indexes in dropped.items():
        if indexes:
            repaired[container] = [
                entry for i, entry in enumerate(repaired[container]) if i not in indexes
            ]
    return repaired


def _validate_leniently(merged: dict[str, Any], base: dict[str, Any]) -> ComponentConfig:
    candidate = merged
    for _ in range(MAX_REPAIR_PASSES):
        try:
            return ComponentConfig.model_validate(candidate)
        except ValidationError as e:
            candidate = _repair(candidate, base, e.errors())

    try:
        return ComponentConfig.model_validate(candidate)
    except ValidationError as e:
        logger.warning(f"Stored config still invalid, using defaults: {e}")
        return ComponentConfig.model_validate(base)


def merge_config(
    component_type: ComponentType | str | None,
    stored: ComponentConfig | Mapping[str, Any] | None = None,
) -> ComponentConfig:
    """Merge a stored (partial) config onto the defaults for ``component_type``.

    Every top-level key present in ``stored`` replaces the default, except
    ``actions`` which is merged flag by flag so omitted flags keep their
    default. Invalid stored values are repaired as narrowly as
    possible: a bad attribute of a field or column entry is dropped, an entry
    without a usable key is dropped, a bad action flag keeps its default and
    any other bad key falls back to its default. This function never
    raises on stored data and never returns a shared object.
    """
    base = _template(component_type)
    overlay = _as_overlay(stored)
    if not overlay:
        return ComponentConfig.model_validate(base)

    return _validate_leniently(_merge_dicts(base, overlay), base)


def config_to_json(config: ComponentConfig) -> dict[str, Any]:
    return config.to_json()
