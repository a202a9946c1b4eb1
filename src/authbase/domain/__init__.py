"""Domain layer: entities and exceptions with no framework dependencies."""
