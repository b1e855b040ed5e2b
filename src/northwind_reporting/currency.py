"""Currency exchange service.

Only the construction contract exists; rate lookup is not implemented and
nothing in the reporting flow calls it.
"""

from decimal import Decimal

from .exceptions import InvalidConfigurationError


class CurrencyExchangeService:
    """Looks up exchange rates with an access key for a rates provider."""

    def __init__(self, access_key: str):
        if access_key is None or not str(access_key).strip():
            raise InvalidConfigurationError("access_key")
        self._access_key = access_key

    def get_currency_exchange_rate(self, base_currency: str, exchange_currency: str) -> Decimal:
        raise NotImplementedError("Currency exchange rate lookup is not implemented.")
