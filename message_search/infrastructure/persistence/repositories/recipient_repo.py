"""Recipient persistence: lookup by id and get-or-create by address."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from message_search.application.dtos.search import Recipient
from message_search.domain.value_objects import RecipientId
from message_search.infrastructure.persistence.database import connection
from message_search.infrastructure.persistence.schema import recipient


def _to_recipient(row) -> Recipient:
    return Recipient(
        id=RecipientId(row.id),
        address=row.address,
        display_name=row.display_name,
        registered=bool(row.registered),
    )


class SqlRecipientRepository:
    """Recipient rows. Used through CachedRecipientResolver by search builders."""

    def __init__(self, db: Engine) -> None:
        self.db = db

    def get_by_id(self, recipient_id: RecipientId) -> Recipient | None:
        """Return recipient by id, or None."""
        with connection(self.db) as conn:
            row = conn.execute(
                select(recipient).where(recipient.c.id == int(recipient_id))
            ).first()
        return _to_recipient(row) if row else None

    def get_by_address(self, address: str) -> Recipient | None:
        """Return recipient by exact address, or None."""
        with connection(self.db) as conn:
            row = conn.execute(
                select(recipient).where(recipient.c.address == address)
            ).first()
        return _to_recipient(row) if row else None

    def get_or_create_by_address(self, address: str) -> Recipient:
        """Return the recipient for address, inserting an unregistered one if new."""
        existing = self.get_by_address(address)
        if existing is not None:
            return existing
        try:
            with connection(self.db, begin=True) as conn:
                conn.execute(insert(recipient).values(address=address, registered=False))
        except IntegrityError:
            # Inserted concurrently by another thread.
            pass
        created = self.get_by_address(address)
        if created is None:
            raise LookupError(f"Recipient for address {address!r} could not be created")
        return created
