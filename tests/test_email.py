"""
Tests for email composition and the Brevo client
"""

import asyncio
import json

import httpx

from app.core.config import Settings
from app.services.email_service import BrevoEmailService, EmailRecipient, get_email_service
from app.services.email_templates import (
    build_confirmation_email,
    build_notification_email,
    confirmation_subject,
    dietary_label,
    notification_subject,
)

CONFIG = Settings(
    COUPLE_NAMES="Giulia e Marco",
    COUPLE_SIGNATURE="Marco e Giulia",
    DASHBOARD_URL="https://example.com/dashboard",
)


def test_dietary_label_lookup():
    assert dietary_label("nessuna") == "Nessuna preferenza"
    assert dietary_label("vegetariano") == "Vegetariano"
    assert dietary_label("vegano") == "Vegano"
    assert dietary_label("allergie") == "Intolleranze/Allergie"
    assert dietary_label(None) == "Nessuna"
    assert dietary_label("sconosciuta") == "Nessuna"


def test_confirmation_email_variants():
    attending = build_confirmation_email("Anna", True, CONFIG)
    declined = build_confirmation_email("Anna", False, CONFIG)

    assert "Grazie per la conferma!" in attending
    assert "Caro/a Anna" in attending
    assert "Risposta Ricevuta" in declined
    assert "non potrai essere presente" in declined


def test_notification_email_attending_with_notes():
    html = build_notification_email(["Anna", "Bruno"], True, CONFIG, "allergie", "arachidi")

    assert "Nuova Conferma di Partecipazione" in html
    assert "Anna, Bruno" in html
    assert "Intolleranze/Allergie" in html
    assert "Note dieta:" in html
    assert "arachidi" in html
    assert "<strong>2</strong>" in html


def test_notification_email_without_notes_row():
    html = build_notification_email(["Anna"], True, CONFIG, None, None)

    assert "Note dieta:" not in html
    assert ">Nessuna<" in html


def test_notification_email_declined():
    html = build_notification_email(["Anna"], False, CONFIG, "vegano", "ignorate")

    assert "Non Partecipa" in html
    assert "Non parteciperanno" in html
    assert "Dieta:" not in html


def test_emails_use_configured_signature_and_dashboard():
    confirmation = build_confirmation_email("Anna", True, CONFIG)
    notification = build_notification_email(["Anna"], False, CONFIG)

    assert "Marco e Giulia" in confirmation
    assert "https://example.com/dashboard" in notification


def test_templates_escape_guest_input():
    html = build_confirmation_email("<script>alert(1)</script>", True, CONFIG)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_subjects():
    assert notification_subject(["Anna", "Bruno"], True) == "Nuova Conferma: Anna, Bruno"
    assert notification_subject(["Anna"], False) == "Non Partecipa: Anna"
    assert confirmation_subject(True, CONFIG) == "Conferma Partecipazione - Matrimonio Giulia e Marco"
    assert confirmation_subject(False, CONFIG) == "Risposta Ricevuta - Matrimonio Giulia e Marco"


def _service(handler, api_key="test-key"):
    config = Settings(BREVO_API_KEY=api_key, SENDER_EMAIL="info@example.com", SENDER_NAME="Sposi")
    return BrevoEmailService(config=config, transport=httpx.MockTransport(handler))


def test_send_email_posts_brevo_payload():
    captured = []

    def handler(request):
        captured.append(request)
        return httpx.Response(201, json={"messageId": "abc"})

    service = _service(handler)
    ok = asyncio.run(service.send_email(
        [EmailRecipient(email="anna@example.com", name="Anna")], "Oggetto", "<p>ciao</p>"
    ))

    assert ok is True
    request = captured[0]
    assert str(request.url) == "https://api.brevo.com/v3/smtp/email"
    assert request.headers["api-key"] == "test-key"
    assert json.loads(request.content) == {
        "sender": {"email": "info@example.com", "name": "Sposi"},
        "to": [{"email": "anna@example.com", "name": "Anna"}],
        "subject": "Oggetto",
        "htmlContent": "<p>ciao</p>",
    }


def test_send_email_reports_provider_error():
    service = _service(lambda request: httpx.Response(400, text="invalid sender"))

    ok = asyncio.run(service.send_email([EmailRecipient(email="a@example.com")], "s", "h"))

    assert ok is False


def test_send_email_reports_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    service = _service(handler)

    ok = asyncio.run(service.send_email([EmailRecipient(email="a@example.com")], "s", "h"))

    assert ok is False


def test_send_email_without_api_key_skips_request():
    captured = []

    def handler(request):
        captured.append(request)
        return httpx.Response(201)

    service = _service(handler, api_key=None)

    ok = asyncio.run(service.send_email([EmailRecipient(email="a@example.com")], "s", "h"))

    assert ok is False
    assert captured == []


def test_organizer_recipients_from_settings():
    config = Settings(ORGANIZER_RECIPIENTS=[
        {"email": "sposo@example.com", "name": "Alessandro"},
        {"email": "sposa@example.com"},
    ])

    recipients = BrevoEmailService(config=config).organizer_recipients()

    assert recipients == [
        EmailRecipient(email="sposo@example.com", name="Alessandro"),
        EmailRecipient(email="sposa@example.com", name=""),
    ]


def test_get_email_service_uses_injected_settings():
    service = get_email_service(CONFIG)

    assert service.config is CONFIG
