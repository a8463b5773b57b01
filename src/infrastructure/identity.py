"""Identity provider restoring the user from the environment.

The configured ``LEDGER_USER_ID`` plays the role of a persisted session.
Without it, callers fall back to an anonymous identity that lives for the
process only.
"""

from uuid import uuid4

from src.application.ports.document_store import Unsubscribe
from src.application.ports.identity import (
    AuthStateListener,
    IdentityProviderPort,
    UserIdentity,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


class EnvIdentityProvider(IdentityProviderPort):
    """IdentityProviderPort implementation driven by settings."""

    def __init__(self, settings: LedgerSettings, logger=None) -> None:
        self._settings = settings
        self._logger = logger or get_app_logger()
        self._user: UserIdentity | None = None
        self._listeners: list[AuthStateListener] = []
        if settings.user_id:
            self._user = self._configured_user()

    def current_user(self) -> UserIdentity | None:
        return self._user

    def sign_in(self) -> UserIdentity:
        """Restore the configured identity.

        Raises:
            RuntimeError: When no LEDGER_USER_ID is configured.
        """
        if not self._settings.user_id:
            raise RuntimeError(
                "Missing environment variable: LEDGER_USER_ID"
            )
        self._set_user(self._configured_user())
        return self._user

    def sign_in_anonymously(self) -> UserIdentity:
        user = UserIdentity(uid=f"anon-{uuid4().hex}", is_anonymous=True)
        self._set_user(user)
        return user

    def sign_out(self) -> None:
        self._set_user(None)

    def on_auth_state_changed(
        self,
        listener: AuthStateListener,
    ) -> Unsubscribe:
        self._listeners.append(listener)
        listener(self._user)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _configured_user(self) -> UserIdentity:
        return UserIdentity(
            uid=self._settings.user_id,
            display_name=self._settings.display_name,
            is_anonymous=False,
        )

    def _set_user(self, user: UserIdentity | None) -> None:
        self._user = user
        self._logger.info(
            f"Auth state changed: {user.uid if user else 'signed out'}"
        )
        for listener in list(self._listeners):
            listener(user)


__all__ = ["EnvIdentityProvider"]
