"""Use case to establish the signed-in user."""

from src.application.ports.identity import IdentityProviderPort, UserIdentity
from src.infrastructure.logging.logger import get_app_logger


class ResolveUserUseCase:
    """Return the current user, signing in anonymously when needed."""

    def __init__(
        self,
        identity_provider: IdentityProviderPort,
        logger=None,
        allow_anonymous: bool = True,
    ) -> None:
        """Initialize the use case.

        Args:
            identity_provider: Port to the identity provider.
            logger: Optional logger compatible with logging.Logger-like API.
            allow_anonymous: Fall back to an anonymous identity.
        """
        self._identity_provider = identity_provider
        self._logger = logger or get_app_logger()
        self._allow_anonymous = allow_anonymous

    def execute(self) -> UserIdentity | None:
        """Return the signed-in user.

        Returns:
            UserIdentity | None: The restored or anonymous identity, or None
            when nobody is signed in and anonymous sign-in is disabled.
        """
        user = self._identity_provider.current_user()
        if user is not None:
            self._logger.info(f"Resolved user {user.uid}")
            return user
        if not self._allow_anonymous:
            self._logger.warning("No signed-in user")
            return None
        user = self._identity_provider.sign_in_anonymously()
        self._logger.info(f"Signed in anonymously as {user.uid}")
        return user


__all__ = ["ResolveUserUseCase"]
