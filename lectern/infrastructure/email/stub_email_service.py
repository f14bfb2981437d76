"""Stub email service (logs instead of sending).

Used in every environment until a delivery provider is wired in.
"""

from lectern.domain.protocols.logger_protocol import LoggerProtocol


class StubEmailService:
    """EmailProtocol implementation that records the send in the log.

    The verification URL carries the token, so only its host and path
    are logged.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def send_verification_email(
        self,
        to_email: str,
        verification_url: str,
    ) -> None:
        self._logger.info(
            "verification_email_stubbed",
            to_email=to_email,
            verification_endpoint=verification_url.split("?", 1)[0],
        )
