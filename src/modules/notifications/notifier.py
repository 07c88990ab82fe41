"""Fire-and-forget fan-out of a message to every configured chat."""

from __future__ import annotations

import structlog
from django.conf import settings

from modules.notifications.tasks import deliver_telegram_message

logger = structlog.get_logger(__name__)


def notify(message: str) -> int:
    """Queue *message* for every chat in ``TELEGRAM_CHAT_IDS``.

    Returns the number of deliveries queued.  Never raises: a missing
    token or an unreachable broker is logged and the message dropped.
    """
    if not settings.TELEGRAM_BOT_TOKEN:
        logger.warning("notification.skipped", reason="missing_bot_token")
        return 0

    queued = 0
    for chat_id in settings.TELEGRAM_CHAT_IDS:
        try:
            deliver_telegram_message.delay(chat_id, message)
        except Exception:
            logger.exception("notification.enqueue_failed", chat_id=chat_id)
            continue
        queued += 1

    logger.info("notification.queued", count=queued)
    return queued
