"""Contact access gate (implements IContactPermission)."""

from __future__ import annotations

from collections.abc import Iterable

from message_search.core.config import Settings

CONTACTS_READ = "contacts.read"
CONTACTS_WRITE = "contacts.write"

# Either grant allows reading the contact stores.
_CONTACT_ACCESS = frozenset({CONTACTS_READ, CONTACTS_WRITE})


class GrantedPermissions:
    """Permission set granted to the running app."""

    def __init__(self, granted: Iterable[str]) -> None:
        self.granted = frozenset(granted)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GrantedPermissions":
        return cls(settings.granted_permissions)

    def has_any(self, *permissions: str) -> bool:
        return any(p in self.granted for p in permissions)

    def has_read_access(self) -> bool:
        return self.has_any(*_CONTACT_ACCESS)
