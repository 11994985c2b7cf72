"""Test doubles and row builders shared across test modules."""

from message_search.application.dtos.search import Recipient
from message_search.domain.value_objects import RecipientId
from message_search.shared.rows import SequenceRowSource

MESSAGE_COLUMNS = (
    "conversation_recipient_id",
    "message_recipient_id",
    "snippet",
    "normalized_received_timestamp",
    "thread_id",
)
CONTACT_COLUMNS = ("id", "address", "display_name")
THREAD_COLUMNS = ("thread_id", "recipient_id", "snippet", "date", "message_count")


class FakeRecipients:
    """Recipient resolver stub: ids map to '+<id>', addresses get stable ids."""

    def __init__(self) -> None:
        self.resolved_ids: list[RecipientId] = []
        self.resolved_addresses: list[str] = []
        self._address_ids: dict[str, int] = {}

    def resolve(self, recipient_id: RecipientId) -> Recipient:
        self.resolved_ids.append(recipient_id)
        return Recipient(id=recipient_id, address=f"+{recipient_id.value}")

    def resolve_address(self, address: str) -> Recipient:
        self.resolved_addresses.append(address)
        rid = self._address_ids.setdefault(address, len(self._address_ids) + 1)
        return Recipient(id=RecipientId(rid), address=address)


class TrackingRowSource(SequenceRowSource):
    """In-memory row source that counts close() and row_at() calls."""

    def __init__(self, columns, rows) -> None:
        super().__init__(columns, rows)
        self.close_calls = 0
        self.reads: list[int] = []

    def row_at(self, position):
        self.reads.append(position)
        return super().row_at(position)

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class UncountableRowSource:
    """Row source whose row count cannot be read."""

    def __init__(self) -> None:
        self.close_calls = 0

    def __len__(self) -> int:
        raise OSError("cursor window could not be allocated")

    def row_at(self, position):
        raise AssertionError("row_at must not be called")

    def close(self) -> None:
        self.close_calls += 1

    @property
    def closed(self) -> bool:
        return self.close_calls > 0


def message_rows(*rows: tuple) -> SequenceRowSource:
    return SequenceRowSource(MESSAGE_COLUMNS, rows)


def contact_rows(*rows: tuple) -> SequenceRowSource:
    return SequenceRowSource(CONTACT_COLUMNS, rows)


def thread_rows(*rows: tuple) -> SequenceRowSource:
    return SequenceRowSource(THREAD_COLUMNS, rows)
