"""Application-level errors raised by the maps provider ports."""


class ProviderUnavailableError(RuntimeError):
    """The geocoding / routing provider cannot be used at all.

    Raised for authentication failures and for a provider that stays
    unreachable after retries. Aborts the whole operation.
    """

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider} unavailable: {reason}")
        self.provider = provider
        self.reason = reason


class TransientProviderError(RuntimeError):
    """A provider call failed in a way worth retrying (rate limit, 5xx, timeout)."""
