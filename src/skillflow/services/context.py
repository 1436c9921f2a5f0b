"""Explicit description of who is acting for an operation."""

from __future__ import annotations

from dataclasses import dataclass

from skillflow.constants import UserRole
from skillflow.models import User

SYSTEM_ACTOR = "System"


@dataclass(frozen=True, slots=True)
class ActorContext:
    """Identity pair passed to operations that need the current actor.

    Attributes:
        acting_as: Identity whose data is being viewed and edited.
        real_identity: Identity that actually signed in. Differs from
            ``acting_as`` only while an admin impersonates someone.
        token: API token of the session, if any.
    """

    acting_as: User | None = None
    real_identity: User | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.acting_as is not None

    @property
    def is_impersonating(self) -> bool:
        return (
            self.acting_as is not None
            and self.real_identity is not None
            and self.acting_as.id != self.real_identity.id
        )

    @property
    def can_administer(self) -> bool:
        """Admin-only areas are closed while impersonating."""
        return (
            not self.is_impersonating
            and self.acting_as is not None
            and self.acting_as.role == UserRole.ADMIN
        )

    @property
    def actor_email(self) -> str:
        return self.acting_as.email if self.acting_as else SYSTEM_ACTOR

    @classmethod
    def for_user(cls, user: User, token: str | None = None) -> ActorContext:
        return cls(acting_as=user, real_identity=user, token=token)
