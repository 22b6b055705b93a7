"""Peewee ORM model definitions"""

from datetime import datetime
from zoneinfo import ZoneInfo

from peewee import (
    BooleanField,
    CharField,
    DatabaseProxy,
    DateField,
    DateTimeField,
    ForeignKeyField,
    Model,
)
from playhouse.shortcuts import ThreadSafeDatabaseMetadata
from playhouse.sqlite_ext import JSONField

from .enums import ComponentType

UTC = ZoneInfo("UTC")

# Use DatabaseProxy for deferred database binding
database_proxy = DatabaseProxy()


class BaseModel(Model):
    """Base model class - supports thread-safe metadata"""

    class Meta:
        database = database_proxy
        model_metadata_class = ThreadSafeDatabaseMetadata


class TimestampedModel(BaseModel):
    created_at = DateTimeField(default=lambda: datetime.now(UTC))
    updated_at = DateTimeField(default=lambda: datetime.now(UTC))

    def save(self, *args, **kwargs):
        """Override save method to auto-update updated_at"""
        if self._pk is not None:
            self.updated_at = datetime.now(UTC)
        return super().save(*args, **kwargs)


class Module(TimestampedModel):
    """Top-level dashboard module"""

    code = CharField(unique=True)
    label = CharField()
    start_date = DateField(null=True)
    end_date = DateField(null=True)

    class Meta:
        table_name = "modules"


class SousModule(TimestampedModel):
    """Sous-module; its code doubles as a fallback component code"""

    module = ForeignKeyField(Module, backref="sous_modules", on_delete="CASCADE")
    code = CharField()
    label = CharField()
    start_date = DateField(null=True)
    end_date = DateField(null=True)

    class Meta:
        table_name = "sous_modules"


class Event(TimestampedModel):
    """Configurable screen; ``config`` is the opaque settings-editor blob"""

    sous_module = ForeignKeyField(SousModule, backref="events", on_delete="CASCADE")
    code = CharField()
    label = CharField()
    active = BooleanField(default=True)
    component_type = CharField(default=ComponentType.FORM.value)
    config = JSONField(null=True)

    class Meta:
        table_name = "events"
