from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from .config import Settings
from .errors import ValueLookupError

logger = logging.getLogger(__name__)


class UbidotsClient:
    """
    Read the last value of a variable from the Ubidots REST API (v1.6).

    API docs: https://ubidots.com/docs/sw/
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        if not settings.ubidots_token:
            raise RuntimeError("Ubidots token is not configured (UBIDOTS_TOKEN)")
        self._token = settings.ubidots_token
        self._base_url = settings.ubidots_base_url.rstrip("/")
        self._timeout = settings.request_timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def last_value_url(self, device: str, variable: str) -> str:
        return (
            f"{self._base_url}/api/v1.6/devices/"
            f"{quote(device, safe='')}/{quote(variable, safe='')}/lv"
        )

    def get_last_value(self, device: str, variable: str) -> Any:
        url = self.last_value_url(device, variable)
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(
                url,
                headers={
                    "Content-Type": "application/json",
                    "X-Auth-Token": self._token,
                },
                timeout=self._timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise ValueLookupError(
                f"{status} - lookup of {device}/{variable} failed", device, variable
            ) from exc
        except requests.RequestException as exc:
            # Also covers JSON decoding errors (requests.JSONDecodeError).
            raise ValueLookupError(
                f"lookup of {device}/{variable} failed: {exc}", device, variable
            ) from exc
