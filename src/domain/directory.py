"""
User directory domain service.

Resolves attendees by their normalized email address, creating a user
the first time an address is seen. The email is the natural key: two
attempts with the same address, in any case or padding, resolve to the
same user, and the name given first is kept.
"""

import logging
from dataclasses import dataclass, field

from .models import User, utc_now
from .ports import Clock, PersistenceGateway
from .sequence import SequenceGenerator
from .validation import normalize_email, validate_email, validate_name

logger = logging.getLogger(__name__)


@dataclass
class UserDirectory:
    """Domain service owning the user collection."""

    gateway: PersistenceGateway
    clock: Clock = utc_now
    _users: list[User] = field(default_factory=list, init=False, repr=False)
    _sequence: SequenceGenerator = field(
        default_factory=SequenceGenerator, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        """Re-read users from the gateway; see EventCatalog.refresh."""
        loaded = self.gateway.load_users()
        if loaded is None:
            return
        self._users = loaded
        self._sequence.advance_past(user.id for user in loaded)

    def find_or_create(self, name: str, email: str) -> User:
        """
        Resolve a user by email, creating one on first sight.

        Args:
            name: Display name, used only when the user is created
            email: Institutional email address (will be normalized)

        Returns:
            Existing user for the email, unchanged, or the new user

        Raises:
            ValidationError: If the email is malformed or not institutional,
                or if a new user's name is shorter than 2 characters
        """
        self.refresh()
        normalized_email = validate_email(email)

        existing = self._find(normalized_email)
        if existing is not None:
            return existing

        clean_name = validate_name(name)
        user = User(
            id=self._sequence.peek(),
            name=clean_name,
            email=normalized_email,
            registered_at=self.clock(),
        )
        updated = [*self._users, user]
        self.gateway.save_users(updated)
        self._users = updated
        self._sequence.advance_past([user.id])

        logger.info("Created user %s for %s", user.id, user.email)
        return user

    def find_by_email(self, email: str) -> User | None:
        """Lookup only: never validates and never creates."""
        return self._find(normalize_email(email))

    def get_user_by_id(self, user_id: int) -> User | None:
        return next((user for user in self._users if user.id == user_id), None)

    def _find(self, normalized_email: str) -> User | None:
        return next((user for user in self._users if user.email == normalized_email), None)
