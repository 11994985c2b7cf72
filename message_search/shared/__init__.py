"""Shared building blocks: row sources, lazy result lists, utilities, telemetry."""
