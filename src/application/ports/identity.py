"""Port for the external identity provider."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from src.application.ports.document_store import Unsubscribe


@dataclass(frozen=True)
class UserIdentity:
    """Opaque user id plus profile fields for display."""

    uid: str
    display_name: str | None = None
    email: str | None = None
    is_anonymous: bool = False


AuthStateListener = Callable[[UserIdentity | None], None]


class IdentityProviderPort(Protocol):
    """Port exposing sign-in state."""

    def current_user(self) -> UserIdentity | None:
        """Return the signed-in user, if any."""

    def sign_in(self) -> UserIdentity:
        """Sign in interactively or restore the configured identity."""

    def sign_in_anonymously(self) -> UserIdentity:
        """Create an anonymous identity."""

    def sign_out(self) -> None:
        """Forget the current identity."""

    def on_auth_state_changed(
        self,
        listener: AuthStateListener,
    ) -> Unsubscribe:
        """Call ``listener`` now and on every sign-in state transition."""


__all__ = ["UserIdentity", "AuthStateListener", "IdentityProviderPort"]
