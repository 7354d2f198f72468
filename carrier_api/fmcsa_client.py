# carrier_api/fmcsa_client.py
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from carrier_api.carrier_verification import RegistryUnavailable
from carrier_api.config import Settings

logger = logging.getLogger(__name__)


class FmcsaClient:
    """Thin async wrapper around the QCMobile docket-number lookup."""

    def __init__(self, base_url: str, web_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.web_key = web_key
        self._client = httpx.AsyncClient(transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "FmcsaClient":
        return cls(settings.fmcsa_base_url, settings.fmcsa_web_key, transport=transport)

    def lookup_url(self, mc_number: str) -> str:
        return f"{self.base_url}/{mc_number}"

    async def lookup(self, mc_number: str) -> Any:
        """
        One GET, no retries. Returns the parsed JSON body; a body without
        `carrier` means FMCSA has no match and is not an error here.
        """
        try:
            resp = await self._client.get(self.lookup_url(mc_number), params={"webKey": self.web_key})
        except httpx.HTTPError as e:
            raise RegistryUnavailable(str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise RegistryUnavailable(f"FMCSA API returned {resp.status_code}: {resp.reason_phrase}")

        try:
            return resp.json()
        except ValueError as e:
            raise RegistryUnavailable(f"FMCSA API returned invalid JSON: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()
