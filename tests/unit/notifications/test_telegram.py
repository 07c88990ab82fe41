from unittest.mock import MagicMock, patch

import pytest
import requests

from modules.notifications.notifier import notify
from modules.notifications.telegram import TELEGRAM_API_URL, TelegramClient

pytestmark = pytest.mark.unit


def _response(ok=True, status_code=200, payload=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload or {"ok": ok}
    response.text = ""
    return response


class TestTelegramClient:
    def test_posts_html_message(self):
        session = MagicMock()
        session.post.return_value = _response()
        client = TelegramClient(token="123:abc", timeout=5, session=session)

        assert client.send_message("42", "<b>hi</b>") is True

        session.post.assert_called_once_with(
            f"{TELEGRAM_API_URL}/bot123:abc/sendMessage",
            json={"chat_id": "42", "text": "<b>hi</b>", "parse_mode": "HTML"},
            timeout=5,
        )

    def test_missing_token_skips(self):
        session = MagicMock()
        client = TelegramClient(token="", session=session)

        assert client.send_message("42", "hi") is False
        session.post.assert_not_called()

    def test_http_error_is_reported_not_raised(self):
        session = MagicMock()
        session.post.return_value = _response(
            ok=False, status_code=400, payload={"description": "chat not found"}
        )
        client = TelegramClient(token="123:abc", session=session)

        assert client.send_message("42", "hi") is False

    def test_network_error_is_reported_not_raised(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("unreachable")
        client = TelegramClient(token="123:abc", session=session)

        assert client.send_message("42", "hi") is False

    def test_defaults_come_from_settings(self, settings):
        settings.TELEGRAM_BOT_TOKEN = "999:xyz"
        settings.TELEGRAM_TIMEOUT = 3
        with patch("modules.notifications.telegram.requests.post") as post:
            post.return_value = _response()
            assert TelegramClient().send_message("1", "hi") is True
        assert post.call_args.kwargs["timeout"] == 3
        assert "bot999:xyz" in post.call_args.args[0]


class TestNotify:
    def test_without_token_nothing_is_queued(self, settings):
        settings.TELEGRAM_BOT_TOKEN = ""
        settings.TELEGRAM_CHAT_IDS = ["1"]
        with patch("modules.notifications.notifier.deliver_telegram_message") as task:
            assert notify("hi") == 0
        task.delay.assert_not_called()

    def test_one_task_per_chat(self, settings):
        settings.TELEGRAM_BOT_TOKEN = "123:abc"
        settings.TELEGRAM_CHAT_IDS = ["1", "2"]
        with patch("modules.notifications.notifier.deliver_telegram_message") as task:
            assert notify("hi") == 2
        task.delay.assert_any_call("1", "hi")
        task.delay.assert_any_call("2", "hi")

    def test_enqueue_failure_is_swallowed(self, settings):
        settings.TELEGRAM_BOT_TOKEN = "123:abc"
        settings.TELEGRAM_CHAT_IDS = ["1", "2"]
        with patch("modules.notifications.notifier.deliver_telegram_message") as task:
            task.delay.side_effect = [ConnectionError("broker down"), None]
            assert notify("hi") == 1

    def test_eager_task_delivers_over_http(self, settings):
        settings.TELEGRAM_BOT_TOKEN = "123:abc"
        settings.TELEGRAM_CHAT_IDS = ["7"]
        with patch("modules.notifications.telegram.requests.post") as post:
            post.return_value = _response()
            assert notify("hello") == 1
        post.assert_called_once()
        assert post.call_args.kwargs["json"]["chat_id"] == "7"
