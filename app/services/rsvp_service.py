"""
Public RSVP submission with email notifications
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import BadInput, NotFound
from app.schemas.guest import RegisterRequest
from app.services.email_service import BrevoEmailService, EmailRecipient
from app.services.email_templates import (
    build_confirmation_email,
    build_notification_email,
    confirmation_subject,
    notification_subject,
)
from app.services.registration_service import RegistrationService, attendance_fields
from app.services.repositories import GuestRepo

logger = logging.getLogger(__name__)

ATTENDING_MESSAGE = "Registrazione completata con successo!"
DECLINED_MESSAGE = "Risposta registrata. Ci dispiace che non potrai essere presente."
CLEARED_MESSAGE = "Risposta rimossa"


class RSVPService:
    """Records one answer for a batch of guests, then notifies by email"""

    def __init__(self, email_service: BrevoEmailService):
        self.email_service = email_service

    async def submit(self, db: Session, request: RegisterRequest) -> str:
        if not request.guest_ids or "attending" not in request.model_fields_set:
            raise BadInput("Campi obbligatori mancanti")

        guests = GuestRepo.list_by_ids(db, request.guest_ids)
        if not guests:
            raise NotFound("Ospiti non trovati")

        guest_names = [guest.name for guest in guests]
        recipients = [
            EmailRecipient(email=guest.email, name=guest.name)
            for guest in guests
            if guest.email
        ]

        if request.attending is None:
            for guest in guests:
                RegistrationService.clear_registration(db, guest)
            logger.info(f"RSVP cleared for {', '.join(guest_names)}")
            return CLEARED_MESSAGE

        fields = attendance_fields(
            request.attending,
            request.dietary_preference,
            request.dietary_notes,
        )
        for guest in guests:
            RegistrationService.save_attendance(db, guest, dict(fields))
        logger.info(f"RSVP recorded for {', '.join(guest_names)} (attending={request.attending})")

        await self._notify(guest_names, recipients, request)
        return ATTENDING_MESSAGE if request.attending else DECLINED_MESSAGE

    async def _notify(
        self,
        guest_names: List[str],
        recipients: List[EmailRecipient],
        request: RegisterRequest,
    ) -> None:
        attending = bool(request.attending)
        config = self.email_service.config

        await self._send_quietly(
            self.email_service.organizer_recipients(),
            notification_subject(guest_names, attending),
            build_notification_email(
                guest_names,
                attending,
                config,
                request.dietary_preference,
                request.dietary_notes,
            ),
        )

        for recipient in recipients:
            await self._send_quietly(
                [recipient],
                confirmation_subject(attending, config),
                build_confirmation_email(recipient.name, attending, config),
            )

    async def _send_quietly(self, to: List[EmailRecipient], subject: str, html: str) -> None:
        # Email never fails the RSVP
        try:
            await self.email_service.send_email(to, subject, html)
        except Exception:
            logger.exception(f"Email '{subject}' could not be sent")
