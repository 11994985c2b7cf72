"""Permission gating for data sources."""

from message_search.infrastructure.security.contact_permission import (
    CONTACTS_READ,
    CONTACTS_WRITE,
    GrantedPermissions,
)

__all__ = ["CONTACTS_READ", "CONTACTS_WRITE", "GrantedPermissions"]
