class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass


class InvalidAmountError(CurrencyException):
    pass


class MissingDateRangeError(CurrencyException):
    pass


class MissingRateError(CurrencyException):
    pass


class EmptyResultError(CurrencyException):
    pass


class ProviderError(CurrencyException):
    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class AllProvidersFailedError(CurrencyException):
    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f'All providers failed: {" | ".join(self.errors) or "no providers configured"}')


class CacheError(CurrencyException):
    pass
