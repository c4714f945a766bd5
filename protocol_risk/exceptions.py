"""
Risk engine exceptions.

Only UnknownProtocolError ever reaches a caller. UpstreamFetchError is raised
by the HTTP helpers and always handled by the fetcher that made the call.
"""


class RiskEngineError(Exception):
    """Base class for all risk engine errors."""


class UnknownProtocolError(RiskEngineError, KeyError):
    """
    Raised when a protocol identifier has no entry in the registry.

    Attributes
    ----------
    protocol_id : str
    """

    def __init__(self, protocol_id: str) -> None:
        self.protocol_id = protocol_id
        super().__init__(f"Unknown protocol: {protocol_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class UpstreamFetchError(RiskEngineError):
    """Raised when an upstream data source fails or returns a malformed body."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")
