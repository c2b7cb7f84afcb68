from dataclasses import dataclass
from uuid import UUID

from legalhub.domain.models.user import UserRole


@dataclass(frozen=True)
class Actor:
    """Identity claims supplied by the authentication layer for one request."""

    role: UserRole
    user_id: UUID
    company_id: UUID | None = None
    company_slug: str | None = None
    email: str | None = None

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles


@dataclass(frozen=True)
class ActorContext:
    """An actor together with the company it was resolved to act for."""

    actor: Actor | None
    company_id: UUID | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.actor is None

    @property
    def user_id(self) -> UUID | None:
        return self.actor.user_id if self.actor else None

    @property
    def role(self) -> UserRole | None:
        return self.actor.role if self.actor else None

    def has_role(self, *roles: UserRole) -> bool:
        return self.actor is not None and self.actor.has_role(*roles)


ANONYMOUS = ActorContext(actor=None)
