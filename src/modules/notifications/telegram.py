"""Minimal Telegram Bot API client.

Only ``sendMessage`` is used.  Failures are logged and reported through
the return value; nothing here raises.
"""

from __future__ import annotations

from typing import Optional

import requests
import structlog
from django.conf import settings

logger = structlog.get_logger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramClient:
    def __init__(
        self,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._token = settings.TELEGRAM_BOT_TOKEN if token is None else token
        self._timeout = settings.TELEGRAM_TIMEOUT if timeout is None else timeout
        self._http = session or requests

    @property
    def configured(self) -> bool:
        return bool(self._token)

    def send_message(self, chat_id: str, text: str) -> bool:
        """POST *text* to *chat_id*; ``True`` if Telegram accepted it."""
        log = logger.bind(chat_id=chat_id)
        if not self.configured:
            log.warning("notification.telegram_not_configured")
            return False

        try:
            response = self._http.post(
                f"{TELEGRAM_API_URL}/bot{self._token}/sendMessage",
                json={"chat_id": chat_id, "text": text, "parse_mode": "HTML"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            log.error("notification.delivery_error", error=str(exc))
            return False

        if not response.ok:
            log.error(
                "notification.delivery_failed",
                status_code=response.status_code,
                description=_error_description(response),
            )
            return False

        log.info("notification.delivered")
        return True


def _error_description(response: requests.Response) -> str:
    try:
        return response.json().get("description", response.text)
    except ValueError:
        return response.text
