from datetime import UTC, datetime

import httpx

from domain.models.currency import RateSet
from infrastructure.providers.base import BaseRateProvider, today


class OpenExchangeProvider(BaseRateProvider):
    """
    Open Exchange Rates. The free plan only quotes against USD, so other
    bases are derived by rebasing the USD table.
    """

    BASE_URL = "https://openexchangerates.org/api"
    NATIVE_BASE = "USD"

    def __init__(
        self,
        app_id: str,
        base_url: str = BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20,
    ):
        super().__init__(base_url, client=client, timeout=timeout)
        self.app_id = app_id

    @property
    def name(self) -> str:
        return "openexchange"

    async def fetch_latest(self, base: str, symbols: list[str]) -> RateSet:
        if not self.app_id:
            raise self._error("missing app id")

        params = {"app_id": self.app_id}
        if symbols:
            wanted = list(symbols)
            if base != self.NATIVE_BASE and base not in wanted:
                wanted.append(base)
            params["symbols"] = ",".join(wanted)

        data = await self._request("latest.json", params)

        if data.get("error"):
            message = data.get("description", data.get("message", "Unknown error"))
            raise self._error(f"API error: {message}")
        if not data.get("base"):
            raise self._error("bad payload: missing base")

        return RateSet(
            base=base,
            date=self._parse_timestamp(data.get("timestamp")),
            rates=self._normalize_rates(data.get("rates"), str(data["base"]).upper(), base, symbols),
            provider=self.name,
        )

    def _parse_timestamp(self, timestamp) -> str:
        if timestamp is None:
            return today()
        try:
            return datetime.fromtimestamp(float(timestamp), tz=UTC).date().isoformat()
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise self._error(f"bad payload: invalid timestamp {timestamp!r}") from e
