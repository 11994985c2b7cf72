"""Domain layer: exceptions and value objects (no infrastructure imports)."""
