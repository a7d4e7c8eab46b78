"""Customer identity resolution with per-session caching."""

from typing import Optional

from app.application.ports.customer_directory import CustomerDirectory
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.domain.value_objects.customer_identity import CustomerIdentity


class CustomerIdentityService:
    """Resolves WhatsApp users to backend customers."""

    def __init__(self, directory: CustomerDirectory, sessions: SessionLifecycle) -> None:
        """
        Initialize customer identity service.

        Args:
            directory: Backend customer directory
            sessions: Session lifecycle holding the cached identity
        """
        self._directory = directory
        self._sessions = sessions

    async def cached(self, user_id: str) -> Optional[CustomerIdentity]:
        """Identity cached on the session, without calling the backend."""
        session = await self._sessions.get_session(user_id)
        return session.customer if session else None

    async def resolve(self, user_id: str) -> Optional[CustomerIdentity]:
        """
        Resolve the customer for a user.

        Args:
            user_id: WhatsApp phone number

        Returns:
            Customer identity, or None if the phone is not registered

        Raises:
            BackendApiError: If the backend cannot be queried
        """
        customer = await self.cached(user_id)
        if customer is not None:
            return customer

        validation = await self._directory.validate_by_phone(user_id)
        if not validation.registered or validation.customer is None:
            return None
        await self._sessions.cache_customer(user_id, validation.customer)
        return validation.customer

    async def register(self, user_id: str, full_name: str) -> CustomerIdentity:
        """
        Register a new customer and cache the identity.

        Args:
            user_id: WhatsApp phone number
            full_name: "Nombre Apellido"

        Returns:
            Registered customer identity

        Raises:
            BackendApiError: If registration fails
        """
        customer = await self._directory.register_customer(user_id, full_name)
        await self._sessions.cache_customer(user_id, customer)
        return customer
