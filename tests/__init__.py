"""Test suite for lectern."""
