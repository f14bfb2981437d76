"""Lectern: credential and session lifecycle core for a content-reading app."""

__version__ = "0.1.0"
