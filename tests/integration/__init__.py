"""Integration tests (real bcrypt, PyJWT, SQLite)."""
