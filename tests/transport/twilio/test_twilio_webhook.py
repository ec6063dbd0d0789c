"""
Twilio Webhook Tests

HTTP contract of the two carrier callbacks:
- POST /     → 200 (empty), 204 (replied), 400 (malformed), 500 (failed)
- POST /sms  → TwiML echo
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from gateway.handler import HandlerResult, HandlerStatus, InboundMessageHandler
from gateway.intents import IntentKind
from incidents import FailingIncidentStore, InMemoryIncidentStore
from inference import AnswerOracle, StubModelBackend
from main import app
from transport.twilio.sender import LoggingMessageSender

client = TestClient(app)

SENDER = "whatsapp:+9779812345678"


def real_handler(store=None, sender=None):
    return InboundMessageHandler(
        store=store if store is not None else InMemoryIncidentStore(),
        oracle=AnswerOracle(StubModelBackend(output="An answer."), timeout_s=5),
        sender=sender if sender is not None else LoggingMessageSender(),
    )


class TestWhatsAppWebhook:

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_empty_body_acknowledged_without_reply(self, mock_get_handler):
        sender = LoggingMessageSender()
        mock_get_handler.return_value = real_handler(sender=sender)

        response = client.post("/", data={"From": SENDER, "Body": "   "})

        assert response.status_code == 200
        assert sender.sent == []

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_reply_sent_returns_204(self, mock_get_handler):
        sender = LoggingMessageSender()
        mock_get_handler.return_value = real_handler(sender=sender)

        response = client.post("/", data={"From": SENDER, "Body": "Can I protest?"})

        assert response.status_code == 204
        assert sender.sent == [(SENDER, "An answer.")]

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_incident_with_media_form_fields(self, mock_get_handler):
        store = InMemoryIncidentStore()
        sender = LoggingMessageSender()
        mock_get_handler.return_value = real_handler(store=store, sender=sender)

        response = client.post("/", data={
            "From": SENDER,
            "Body": "incident: detained without warrant",
            "NumMedia": "2",
            "MediaUrl0": "https://api.twilio.com/media/0",
            "MediaContentType0": "image/jpeg",
            "MediaUrl1": "",
        })

        assert response.status_code == 204
        record = store.load()[0]
        assert record.description == "detained without warrant"
        assert [a.url for a in record.attachments] == ["https://api.twilio.com/media/0"]
        assert "1 attachment(s)" in sender.sent[0][1]

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_storage_failure_returns_500(self, mock_get_handler):
        sender = LoggingMessageSender()
        mock_get_handler.return_value = real_handler(store=FailingIncidentStore(), sender=sender)

        response = client.post("/", data={"From": SENDER, "Body": "incident: arrested"})

        assert response.status_code == 500
        assert sender.sent == []

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_failed_result_returns_500(self, mock_get_handler):
        handler = AsyncMock()
        handler.handle.return_value = HandlerResult(
            status=HandlerStatus.FAILED,
            intent=IntentKind.HELP,
            error_kind="DeliveryError",
        )
        mock_get_handler.return_value = handler

        response = client.post("/", data={"From": SENDER, "Body": "help"})

        assert response.status_code == 500

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_missing_from_returns_400(self, mock_get_handler):
        response = client.post("/", data={"Body": "help"})

        assert response.status_code == 400
        mock_get_handler.assert_not_called()

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_empty_body_without_from_is_acknowledged(self, mock_get_handler):
        response = client.post("/", data={"Body": "   "})

        assert response.status_code == 200
        mock_get_handler.assert_not_called()


class TestSmsWebhook:

    @patch("transport.twilio.webhook.get_inbound_handler")
    def test_echoes_body_as_twiml(self, mock_get_handler):
        response = client.post("/sms", data={"From": "+9779800000000", "Body": "hello"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/xml")
        assert "<Response><Message>Hi! You said: hello</Message></Response>" in response.text
        mock_get_handler.assert_not_called()

    def test_escapes_markup_in_body(self):
        response = client.post("/sms", data={"From": "+1", "Body": "a < b & c"})

        assert "Hi! You said: a &lt; b &amp; c" in response.text


class TestHealth:

    def test_live(self):
        assert client.get("/health/live").json() == {"status": "alive"}
