from __future__ import annotations

from celery import shared_task

from modules.notifications.telegram import TelegramClient


@shared_task(name="notifications.deliver_telegram_message", ignore_result=True)
def deliver_telegram_message(chat_id: str, message: str) -> bool:
    """Entrega uma mensagem a um único chat do Telegram."""
    return TelegramClient().send_message(chat_id, message)
