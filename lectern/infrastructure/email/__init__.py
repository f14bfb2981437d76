"""Email adapters."""

from lectern.infrastructure.email.stub_email_service import StubEmailService

__all__ = ["StubEmailService"]
