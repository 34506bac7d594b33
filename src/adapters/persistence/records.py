"""
Stored record schemas.

Pydantic models describing the JSON records kept in the key-value
store. Field names on the wire are camelCase; the models convert to and
from domain entities. Decoding checks field presence and types only:
business rules are not re-applied, so past events still load.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from src.domain.models import (
    Event,
    EventCategory,
    Registration,
    RegistrationStatus,
    User,
    as_aware,
)


class StoredRecord(BaseModel):
    """Base configuration shared by every stored record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class EventRecord(StoredRecord):
    """Stored form of an Event."""

    id: StrictInt
    title: StrictStr
    description: StrictStr
    date: datetime
    location: StrictStr
    category: EventCategory
    max_capacity: StrictInt = Field(..., alias="maxCapacity")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_domain(cls, event: Event) -> "EventRecord":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.date,
            location=event.location,
            category=event.category,
            max_capacity=event.max_capacity,
            created_at=event.created_at,
        )

    def to_domain(self) -> Event:
        return Event(
            id=self.id,
            title=self.title,
            description=self.description,
            date=as_aware(self.date),
            location=self.location,
            category=self.category,
            max_capacity=self.max_capacity,
            created_at=as_aware(self.created_at),
        )


class UserRecord(StoredRecord):
    """Stored form of a User."""

    id: StrictInt
    name: StrictStr
    email: StrictStr
    registered_at: datetime = Field(..., alias="registeredAt")

    @classmethod
    def from_domain(cls, user: User) -> "UserRecord":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            registered_at=user.registered_at,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            registered_at=as_aware(self.registered_at),
        )


class RegistrationRecord(StoredRecord):
    """Stored form of a Registration."""

    id: StrictInt
    event_id: StrictInt = Field(..., alias="eventId")
    user_id: StrictInt = Field(..., alias="userId")
    registered_at: datetime = Field(..., alias="registeredAt")
    status: RegistrationStatus

    @classmethod
    def from_domain(cls, registration: Registration) -> "RegistrationRecord":
        return cls(
            id=registration.id,
            event_id=registration.event_id,
            user_id=registration.user_id,
            registered_at=registration.registered_at,
            status=registration.status,
        )

    def to_domain(self) -> Registration:
        return Registration(
            id=self.id,
            event_id=self.event_id,
            user_id=self.user_id,
            registered_at=as_aware(self.registered_at),
            status=self.status,
        )
