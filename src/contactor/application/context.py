"""Process-wide state, built once at startup and read-only afterwards."""

import logging
from dataclasses import dataclass

from contactor.application.errors import PermissionDenied, StoreError
from contactor.application.ports import ContactStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactorContext:
    """
    Store handle plus what was learned while opening it.
    Pass the same instance to every engine component.
    """

    store: ContactStore
    has_permission: bool = False
    container_id: str | None = None

    @classmethod
    def open(cls, store: ContactStore) -> "ContactorContext":
        """Request store access once. Raises PermissionDenied when it is refused."""
        try:
            granted = store.request_access()
        except StoreError as exc:
            raise PermissionDenied(f"Access to contacts failed: {exc}") from exc
        if not granted:
            raise PermissionDenied("Access denied.")

        try:
            container_id = store.default_container_id()
        except StoreError as exc:
            logger.warning("Could not resolve default container: %s", exc)
            container_id = None

        return cls(
            store=store,
            has_permission=True,
            container_id=container_id,
        )
