"""Domain value objects for message search.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class RecipientId:
    """Value object for a recipient identifier (positive integer row id).

    Recipients are the resolved identities behind contacts and conversation
    participants; the id is what rows carry and what resolvers accept.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"RecipientId must be an integer, got {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"RecipientId must be positive, got {self.value}")

    @classmethod
    def from_raw(cls, raw: object) -> "RecipientId":
        """Build from a raw column value (int or numeric string)."""
        if isinstance(raw, str) and raw.strip().isdigit():
            return cls(int(raw))
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cls(raw)
        raise ValueError(f"Cannot interpret {raw!r} as a recipient id")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
