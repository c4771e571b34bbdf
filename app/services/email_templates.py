"""
HTML email composition for RSVP confirmations and organizer notifications
"""

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import Settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "emails"

DIETARY_LABELS = {
    "nessuna": "Nessuna preferenza",
    "vegetariano": "Vegetariano",
    "vegano": "Vegano",
    "allergie": "Intolleranze/Allergie",
}
DEFAULT_DIETARY_LABEL = "Nessuna"

CELL_STYLE = "padding: 8px; border-bottom: 1px solid #eee;"
ATTENDING_ACCENT = "#2c5530"
DECLINED_ACCENT = "#c0392b"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def dietary_label(code: Optional[str]) -> str:
    """Map a dietary preference code to its Italian label"""
    code = getattr(code, "value", code)
    return DIETARY_LABELS.get(code or "", DEFAULT_DIETARY_LABEL)


def confirmation_subject(attending: bool, config: Settings) -> str:
    if attending:
        return f"Conferma Partecipazione - Matrimonio {config.COUPLE_NAMES}"
    return f"Risposta Ricevuta - Matrimonio {config.COUPLE_NAMES}"


def notification_subject(guest_names: List[str], attending: bool) -> str:
    names = ", ".join(guest_names)
    return f"Nuova Conferma: {names}" if attending else f"Non Partecipa: {names}"


def build_confirmation_email(guest_name: str, attending: bool, config: Settings) -> str:
    """Email sent to a guest acknowledging their response"""
    template = "confirmation_attending.html" if attending else "confirmation_declined.html"
    return _env.get_template(template).render(
        guest_name=guest_name,
        signature=config.COUPLE_SIGNATURE,
    )


def build_notification_email(
    guest_names: List[str],
    attending: bool,
    config: Settings,
    dietary_preference: Optional[str] = None,
    dietary_notes: Optional[str] = None,
) -> str:
    """Email sent to the organizers summarizing one RSVP batch"""
    if not attending:
        return _env.get_template("notification_declined.html").render(
            guest_names=guest_names,
            accent=DECLINED_ACCENT,
            cell=CELL_STYLE,
            dashboard_url=config.DASHBOARD_URL,
        )

    return _env.get_template("notification_attending.html").render(
        guest_names=guest_names,
        accent=ATTENDING_ACCENT,
        cell=CELL_STYLE,
        dashboard_url=config.DASHBOARD_URL,
        dietary_label=dietary_label(dietary_preference),
        dietary_notes=dietary_notes,
    )
