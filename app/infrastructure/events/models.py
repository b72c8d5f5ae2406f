"""Domain event models.

Events are immutable records of something that happened. Each subclass pins a
stable ``event_name`` at class level and declares its payload as pydantic
fields; instances are frozen once constructed.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, NamedTuple, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EventHistoryEntry(NamedTuple):
    """A dispatched event name and when it was dispatched."""

    event_name: str
    timestamp: datetime


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Subclasses set ``event_name`` and add payload fields:

        class OrderShippedEvent(DomainEvent):
            event_name: ClassVar[str] = "order.shipped"

            order_id: int
            carrier: str

    Attributes:
        event_id: Unique identifier for this occurrence.
        occurred_at: Timezone-aware UTC timestamp of the fact.
    """

    model_config = ConfigDict(frozen=True)

    event_name: ClassVar[str] = "domain.event"

    event_id: UUID = Field(default_factory=uuid4)
    occurred_at: datetime = Field(default_factory=_utc_now)

    @property
    def short_name(self) -> str:
        """Class name without the trailing ``Event`` suffix."""
        name = type(self).__name__
        if name.endswith("Event") and name != "Event":
            return name[: -len("Event")]
        return name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the event for logs and hook payloads.

        Returns:
            Dictionary with ``event_id``, ``event_name``, ISO ``occurred_at``
            and every payload field.
        """
        data = self.model_dump(mode="json")
        data["event_name"] = self.event_name
        return data


EntityId = Union[int, str]


class EntityCreatedEvent(DomainEvent):
    """An entity of any type was created."""

    event_name: ClassVar[str] = "entity.created"

    entity_type: str
    entity_id: EntityId
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def specific_event_name(self) -> str:
        return f"{self.entity_type}.created"


class EntityUpdatedEvent(DomainEvent):
    """An entity of any type was updated.

    ``old_data`` and ``new_data`` hold the field values before and after the
    update. A field counts as changed when its old and new values differ,
    including when it is only present on one side.
    """

    event_name: ClassVar[str] = "entity.updated"

    entity_type: str
    entity_id: EntityId
    old_data: Dict[str, Any] = Field(default_factory=dict)
    new_data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def specific_event_name(self) -> str:
        return f"{self.entity_type}.updated"

    def has_changed(self, field: str) -> bool:
        return self.get_old_value(field) != self.get_new_value(field)

    def get_old_value(self, field: str) -> Any:
        return self.old_data.get(field)

    def get_new_value(self, field: str) -> Any:
        return self.new_data.get(field)

    def get_changed_fields(self) -> List[str]:
        """Changed field names, old-data keys first, in insertion order."""
        fields = list(dict.fromkeys([*self.old_data, *self.new_data]))
        return [field for field in fields if self.has_changed(field)]

    def get_diff(self) -> Dict[str, Dict[str, Any]]:
        """Map each changed field to ``{"old": ..., "new": ...}``."""
        return {
            field: {"old": self.get_old_value(field), "new": self.get_new_value(field)}
            for field in self.get_changed_fields()
        }


class EntityDeletedEvent(DomainEvent):
    """An entity of any type was deleted, with a snapshot of its last data."""

    event_name: ClassVar[str] = "entity.deleted"

    entity_type: str
    entity_id: EntityId
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def specific_event_name(self) -> str:
        return f"{self.entity_type}.deleted"

    def has_data(self) -> bool:
        return bool(self.data)

    def get_value(self, field: str) -> Any:
        return self.data.get(field)


class FieldValueSavedEvent(DomainEvent):
    """A custom field value was saved for an object."""

    event_name: ClassVar[str] = "acf.field_value.saved"

    field_id: int
    field_slug: str
    object_id: int
    object_type: str
    old_value: Any = None
    new_value: Any = None
    lang_id: int

    def has_changed(self) -> bool:
        return self.old_value != self.new_value

    def is_new(self) -> bool:
        return self.old_value is None and self.new_value is not None

    def is_deleted(self) -> bool:
        return self.old_value is not None and self.new_value is None


class FieldValueDeletedEvent(DomainEvent):
    """A custom field value was removed from an object."""

    event_name: ClassVar[str] = "acf.field_value.deleted"

    field_id: int
    field_slug: str
    object_id: int
    object_type: str
    lang_id: int
    deleted_value: Any = None


class GroupCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "acf.group.created"

    group_id: int
    title: str
    slug: str


class GroupUpdatedEvent(DomainEvent):
    """A field group was updated; ``changes`` holds only the new values."""

    event_name: ClassVar[str] = "acf.group.updated"

    group_id: int
    changes: Dict[str, Any]
    old_data: Dict[str, Any] = Field(default_factory=dict)

    def has_changed(self, field: str) -> bool:
        return field in self.changes

    def get_new_value(self, field: str) -> Optional[Any]:
        return self.changes.get(field)

    def get_old_value(self, field: str) -> Optional[Any]:
        return self.old_data.get(field)


class GroupDeletedEvent(DomainEvent):
    event_name: ClassVar[str] = "acf.group.deleted"

    group_id: int
    slug: str
