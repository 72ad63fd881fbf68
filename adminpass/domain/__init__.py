"""Domain layer: enums, value objects and exceptions. No infrastructure imports."""
