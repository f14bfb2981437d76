"""Core layer: configuration, result types, error codes, dependency container."""
