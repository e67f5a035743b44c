from __future__ import annotations

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from .config import Settings
from .errors import SendError

logger = logging.getLogger(__name__)

CHANNEL = "sms"


class VonageClient:
    """
    Send an SMS through the Vonage Messages API (v0.1).

    The API key comes from the inbound webhook, so it is passed per call;
    the matching secret is part of our configuration.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        if not settings.vonage_api_secret:
            raise RuntimeError("Vonage API secret is not configured (VONAGE_API_SECRET)")
        self._secret = settings.vonage_api_secret
        self._url = f"{settings.vonage_base_url.rstrip('/')}/v0.1/messages"
        self._timeout = settings.request_timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def send_message(
        self,
        api_key: str | None,
        message_type: str,
        recipient: str | None,
        sender: str | None,
        text: str,
    ) -> dict[str, Any]:
        """
        Send `text` to `recipient` from `sender`.

        Returns Vonage's JSON response, normally `{"message_uuid": "..."}`.
        """
        if not api_key:
            raise SendError("No Vonage API key to send with")

        payload = {
            "from": {"type": CHANNEL, "number": sender},
            "to": {"type": CHANNEL, "number": recipient},
            "message": {"content": {"type": message_type, "text": text}},
        }
        logger.info("Sending %d-char reply to %s", len(text), recipient)
        try:
            resp = self._session.post(
                self._url,
                json=payload,
                auth=HTTPBasicAuth(api_key, self._secret),
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise SendError(f"Vonage send to {recipient} failed: {exc}") from exc
