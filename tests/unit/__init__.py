"""Unit tests (in-memory fakes and mocks, no I/O)."""
