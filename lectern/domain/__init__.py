"""Domain layer: entities, value objects, errors, ports, validation."""
