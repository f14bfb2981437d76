"""Application layer: commands, handlers, services, DTOs."""
