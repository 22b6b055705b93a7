"""Module / sous-module / event persistence."""

import functools
import logging
from datetime import date
from typing import Any, Mapping

from .components.events import EventRecord
from .enums import ComponentType
from .errors import ConflictException, NotFoundException
from .models import Event, Module, SousModule

logger = logging.getLogger(__name__)

MODULE_FIELDS = frozenset({"code", "label", "start_date", "end_date"})
SOUS_MODULE_FIELDS = MODULE_FIELDS
EVENT_FIELDS = frozenset({"code", "label", "active", "component_type"})


def _get_database():
    """Get database instance (lazy import)."""
    from . import db

    return db.database


def with_connection(func):
    """Run a store method on a pooled connection, reusing an open one."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        database = _get_database()
        if not database.is_closed():
            return func(*args, **kwargs)
        with database.connection_context():
            return func(*args, **kwargs)

    return wrapper


def _apply_changes(instance, changes: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
    for name, value in changes.items():
        setattr(instance, name, value)


def _component_type_value(component_type: ComponentType | str | None) -> str:
    if isinstance(component_type, ComponentType):
        return component_type.value
    if component_type is None or not component_type.strip():
        return ComponentType.FORM.value
    # unknown types are stored as given and resolve to a placeholder
    return component_type.strip()


def to_event_record(event: Event) -> EventRecord:
    return EventRecord(
        id=event.id,
        code=event.code,
        label=event.label,
        active=event.active,
        component_type=event.component_type,
        config=event.config,
        sous_module_id=event.sous_module_id,
    )


class ModuleStore:
    """CRUD over the module hierarchy.

    Writes are last-write-wins; nothing here merges or validates ``config``.
    """

    # ---- modules ----

    @with_connection
    def list_modules(self) -> list[Module]:
        return list(Module.select().order_by(Module.id))

    @with_connection
    def get_module(self, module_id: int) -> Module:
        module = Module.get_or_none(Module.id == module_id)
        if module is None:
            raise NotFoundException(f"Module not found: {module_id}")
        return module

    @with_connection
    def create_module(
        self,
        code: str,
        label: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Module:
        database = _get_database()
        with database.atomic():
            if Module.get_or_none(Module.code == code) is not None:
                raise ConflictException(f"Module code already exists: {code}")
            module = Module.create(code=code, label=label, start_date=start_date, end_date=end_date)
        logger.info(f"Module created: {module.code} ({module.id})")
        return module

    @with_connection
    def update_module(self, module_id: int, **changes) -> Module:
        database = _get_database()
        with database.atomic():
            module = self.get_module(module_id)
            code = changes.get("code")
            if code is not None and code != module.code:
                if Module.get_or_none(Module.code == code) is not None:
                    raise ConflictException(f"Module code already exists: {code}")
            _apply_changes(module, changes, MODULE_FIELDS)
            module.save()
        return module

    @with_connection
    def delete_module(self, module_id: int) -> None:
        module = self.get_module(module_id)
        module.delete_instance(recursive=True)
        logger.info(f"Module deleted: {module_id}")

    # ---- sous-modules ----

    @with_connection
    def get_sous_module(self, sous_module_id: int) -> SousModule:
        sous_module = SousModule.get_or_none(SousModule.id == sous_module_id)
        if sous_module is None:
            raise NotFoundException(f"Sous-module not found: {sous_module_id}")
        return sous_module

    @with_connection
    def list_sous_modules(self, module_id: int) -> list[SousModule]:
        self.get_module(module_id)
        return list(
            SousModule.select().where(SousModule.module == module_id).order_by(SousModule.id)
        )

    @with_connection
    def create_sous_module(
        self,
        module_id: int,
        code: str,
        label: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> SousModule:
        module = self.get_module(module_id)
        sous_module = SousModule.create(
            module=module, code=code, label=label, start_date=start_date, end_date=end_date
        )
        logger.info(f"Sous-module created: {sous_module.code} ({sous_module.id})")
        return sous_module

    @with_connection
    def update_sous_module(self, sous_module_id: int, **changes) -> SousModule:
        sous_module = self.get_sous_module(sous_module_id)
        _apply_changes(sous_module, changes, SOUS_MODULE_FIELDS)
        sous_module.save()
        return sous_module

    @with_connection
    def delete_sous_module(self, sous_module_id: int) -> None:
        sous_module = self.get_sous_module(sous_module_id)
        sous_module.delete_instance(recursive=True)
        logger.info(f"Sous-module deleted: {sous_module_id}")

    # ---- events ----

    def _get_event_row(self, event_id: int) -> Event:
        event = Event.get_or_none(Event.id == event_id)
        if event is None:
            raise NotFoundException(f"Event not found: {event_id}")
        return event

    @with_connection
    def get_event(self, event_id: int) -> EventRecord:
        return to_event_record(self._get_event_row(event_id))

    @with_connection
    def get_event_parent(self, event_id: int) -> SousModule:
        """Sous-module owning the event; its code is the fallback component code."""
        return self._get_event_row(event_id).sous_module

    @with_connection
    def list_events(self, sous_module_id: int) -> list[EventRecord]:
        self.get_sous_module(sous_module_id)
        query = Event.select().where(Event.sous_module == sous_module_id).order_by(Event.id)
        return [to_event_record(e) for e in query]

    @with_connection
    def create_event(
        self,
        sous_module_id: int,
        code: str,
        label: str,
        component_type: ComponentType | str | None = ComponentType.FORM,
        active: bool = True,
        config: dict[str, Any] | None = None,
    ) -> EventRecord:
        sous_module = self.get_sous_module(sous_module_id)
        event = Event.create(
            sous_module=sous_module,
            code=code,
            label=label,
            active=active,
            component_type=_component_type_value(component_type),
            config=config,
        )
        logger.info(f"Event created: {event.code} ({event.id}) as {event.component_type}")
        return to_event_record(event)

    @with_connection
    def update_event(self, event_id: int, **changes) -> EventRecord:
        event = self._get_event_row(event_id)
        if "component_type" in changes:
            changes = {**changes, "component_type": _component_type_value(changes["component_type"])}
        _apply_changes(event, changes, EVENT_FIELDS)
        event.save()
        return to_event_record(event)

    @with_connection
    def delete_event(self, event_id: int) -> None:
        event = self._get_event_row(event_id)
        event.delete_instance()
        logger.info(f"Event deleted: {event_id}")

    @with_connection
    def save_event_config(self, event_id: int, config: dict[str, Any] | None) -> EventRecord:
        """Store the editor's config blob as-is; merging happens at render time."""
        event = self._get_event_row(event_id)
        event.config = config
        event.save()
        logger.info(f"Config saved for event {event_id}")
        return to_event_record(event)

    # ---- hierarchy ----

    @with_connection
    def hierarchy(self) -> list[dict[str, Any]]:
        """Modules with their sous-modules and events, nested and ordered by id."""
        events_by_parent: dict[int, list[dict[str, Any]]] = {}
        for event in Event.select().order_by(Event.id):
            events_by_parent.setdefault(event.sous_module_id, []).append(
                to_event_record(event).model_dump()
            )

        sous_by_module: dict[int, list[dict[str, Any]]] = {}
        for sous_module in SousModule.select().order_by(SousModule.id):
            sous_by_module.setdefault(sous_module.module_id, []).append(
                {
                    **sous_module_to_dict(sous_module),
                    "events": events_by_parent.get(sous_module.id, []),
                }
            )

        return [
            {**module_to_dict(module), "sous_modules": sous_by_module.get(module.id, [])}
            for module in self.list_modules()
        ]


def module_to_dict(module: Module) -> dict[str, Any]:
    return {
        "id": module.id,
        "code": module.code,
        "label": module.label,
        "start_date": module.start_date,
        "end_date": module.end_date,
    }


def sous_module_to_dict(sous_module: SousModule) -> dict[str, Any]:
    return {
        "id": sous_module.id,
        "module_id": sous_module.module_id,
        "code": sous_module.code,
        "label": sous_module.label,
        "start_date": sous_module.start_date,
        "end_date": sous_module.end_date,
    }
