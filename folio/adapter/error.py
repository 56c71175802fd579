"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class OAuthExchangeFailedError(ProviderError):
    """Code exchange or profile fetch failed.

    Covers non-2xx responses, error bodies, missing access tokens, network
    failures and timeouts. The message is for logs only.
    """

    pass


class NoVerifiedEmailError(ProviderError):
    """Provider account has no verified primary email address."""

    def __init__(self, provider: str):
        super().__init__(provider, "no verified primary email")
