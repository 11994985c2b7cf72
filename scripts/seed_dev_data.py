"""Seed a local SQLite message store with dev data.

Loads recipients, address book entries, threads and messages from a JSON
file (or a small built-in sample) into the database named by DATABASE_URL,
creating the schema and FTS index first.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

JSON shape:
    {"recipients": [{"key": "alice", "address": "+1555...", "display_name": "Alice", "registered": true}],
     "system_contacts": [{"address": "+1555...", "display_name": "Bob"}],
     "threads": [{"key": "t1", "recipient": "alice",
                  "messages": [{"sender": "alice", "body": "Hi", "date_received": 1700000000000}]}]}
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from message_search.core.config import get_settings
from message_search.infrastructure.persistence import database
from message_search.infrastructure.persistence.schema import init_schema
from message_search.infrastructure.persistence.writer import LocalStoreWriter
from message_search.shared.telemetry import setup_logging

logger = logging.getLogger("scripts.seed_dev_data")

SAMPLE_DATA: dict = {
    "recipients": [
        {"key": "self", "address": "+15550000000", "display_name": "Me", "registered": True},
        {"key": "john", "address": "+15550100001", "display_name": "John Smith", "registered": True},
        {"key": "jane", "address": "+15550100002", "display_name": "Jane Doe", "registered": True},
    ],
    "system_contacts": [
        {"address": "+15550100003", "display_name": "Johnny Appleseed"},
        {"address": "+15550100002", "display_name": "Jane (work)"},
    ],
    "threads": [
        {
            "key": "john",
            "recipient": "john",
            "messages": [
                {"sender": "john", "body": "Hi there, it's John's new number!", "date_received": 1700000000000},
                {"sender": "self", "body": "I'm saving it now", "date_received": 1700000060000},
            ],
        },
        {
            "key": "jane",
            "recipient": "jane",
            "messages": [
                {"sender": "jane", "body": "Lunch at noon? I'm near the station.", "date_received": 1700000120000},
            ],
        },
    ],
}


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def seed(data: dict, writer: LocalStoreWriter) -> dict[str, int]:
    """Insert data; return counts per kind."""
    recipient_ids: dict[str, int] = {}
    for r in data.get("recipients", []):
        recipient_ids[r["key"]] = writer.add_recipient(
            r.get("address"), r.get("display_name"), bool(r.get("registered", False))
        )
    for c in data.get("system_contacts", []):
        writer.add_system_contact(c["address"], c.get("display_name"))

    messages = 0
    for t in data.get("threads", []):
        thread_id = writer.add_thread(recipient_ids[t["recipient"]])
        for m in t.get("messages", []):
            writer.add_message(
                thread_id, recipient_ids[m["sender"]], m["body"], int(m["date_received"])
            )
            messages += 1
    return {
        "recipients": len(recipient_ids),
        "system_contacts": len(data.get("system_contacts", [])),
        "threads": len(data.get("threads", [])),
        "messages": messages,
    }


def main(argv: list[str]) -> int:
    _load_env()
    setup_logging()
    data = SAMPLE_DATA
    if len(argv) > 1:
        path = Path(argv[1])
        if not path.exists():
            logger.error("Seed file not found: %s", path)
            return 1
        data = json.loads(path.read_text(encoding="utf-8"))

    engine = database.get_engine()
    init_schema(engine)
    counts = seed(data, LocalStoreWriter(engine))
    logger.info("Seeded %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
    database.dispose_engine()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
