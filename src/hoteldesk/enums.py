"""Enumeration type definitions"""

from enum import Enum


class ComponentType(str, Enum):
    FORM = "form"
    TABLE = "table"
    LIST = "list"
    DASHBOARD = "dashboard"
    SETTINGS = "settings"

    @classmethod
    def parse(cls, value) -> "ComponentType | None":
        """Case-insensitive lookup; unknown values yield None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    SELECT = "select"
    TEXTAREA = "textarea"
    SWITCH = "switch"
    CHECKBOX = "checkbox"


class ColumnKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BADGE = "badge"
    BOOLEAN = "boolean"
    ACTIONS = "actions"


class BadgeVariant(str, Enum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC
