"""
Guest and registration management used by the admin and RSVP routes
"""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.errors import BadInput, Conflict, NotFound
from app.models import Guest, Registration
from app.schemas.guest import (
    DietaryPreference,
    GuestResponse,
    PublicGuestResponse,
    UpdateGuestRequest,
)
from app.services.repositories import GuestRepo, RegistrationRepo
from app.services.stats_service import StatsService

logger = logging.getLogger(__name__)

DEFAULT_DIETARY = DietaryPreference.NESSUNA.value


def _code(preference) -> Optional[str]:
    return getattr(preference, "value", preference)


def attendance_fields(
    attending: bool,
    dietary_preference=None,
    dietary_notes: Optional[str] = None,
) -> Dict:
    """Registration columns for an RSVP answer.

    Declining discards any dietary information previously entered.
    """
    if attending:
        return {
            "attending": True,
            "dietary_preference": _code(dietary_preference) or DEFAULT_DIETARY,
            "dietary_notes": dietary_notes or None,
        }
    return {
        "attending": False,
        "dietary_preference": DEFAULT_DIETARY,
        "dietary_notes": None,
        "plus_one_name": None,
        "plus_one_dietary_preference": None,
    }


class RegistrationService:
    """Operations on guests and their single registration"""

    @staticmethod
    def add_guest(db: Session, name: Optional[str], email: Optional[str] = None) -> Guest:
        name = (name or "").strip()
        if not name:
            raise BadInput("Il nome e obbligatorio")
        if GuestRepo.get_by_name(db, name):
            raise Conflict("Esiste gia un ospite con questo nome")

        guest = GuestRepo.create(db, name=name, email=(email or "").strip() or None)
        logger.info(f"Guest {guest.id} added: {guest.name}")
        return guest

    @staticmethod
    def get_guest(db: Session, guest_id: Optional[int]) -> Guest:
        if not guest_id:
            raise BadInput("ID ospite mancante")
        guest = GuestRepo.get_by_id(db, guest_id)
        if not guest:
            raise NotFound("Ospite non trovato")
        return guest

    @staticmethod
    def clear_registration(db: Session, guest: Guest) -> bool:
        """Remove the guest's registration and family members, if any"""
        if guest.registration is None:
            return False
        RegistrationRepo.delete(db, guest.registration)
        logger.info(f"Registration removed for guest {guest.id}")
        return True

    @staticmethod
    def delete_registration(db: Session, guest_id: Optional[int]) -> None:
        guest = RegistrationService.get_guest(db, guest_id)
        if not RegistrationService.clear_registration(db, guest):
            raise BadInput("Nessuna registrazione da eliminare")

    @staticmethod
    def save_attendance(
        db: Session,
        guest: Guest,
        fields: Dict,
        family_members: Optional[List[Dict]] = None,
    ) -> Registration:
        """Create or update the guest's registration.

        ``family_members`` is the complete desired set; ``None`` keeps the
        current members of an attending registration.
        """
        registration = guest.registration
        if registration is None:
            registration = RegistrationRepo.create(db, guest, **fields)
        else:
            registration = RegistrationRepo.update(db, registration, **fields)

        if not fields["attending"]:
            RegistrationRepo.delete_family_members(db, registration)
        elif family_members is not None:
            RegistrationRepo.replace_family_members(db, registration, family_members)
        return registration

    @staticmethod
    def update_guest(db: Session, request: UpdateGuestRequest) -> str:
        """Rename a guest and replace its registration; returns the response message"""
        members = []
        for member in request.family_members or []:
            name = (member.name or "").strip()
            if not name:
                raise BadInput("Nome del familiare mancante")
            members.append({
                "name": name,
                "dietary_preference": _code(member.dietary_preference) or DEFAULT_DIETARY,
                "dietary_notes": member.dietary_notes or None,
            })

        guest = RegistrationService.get_guest(db, request.guest_id)

        new_name = (request.guest_name or "").strip()
        if new_name and new_name != guest.name:
            existing = GuestRepo.get_by_name(db, new_name)
            if existing and existing.id != guest.id:
                raise Conflict("Esiste gia un ospite con questo nome")
            GuestRepo.rename(db, guest, new_name)

        if "attending" not in request.model_fields_set:
            return "Aggiornato con successo"

        if request.attending is None:
            RegistrationService.clear_registration(db, guest)
            return "Registrazione rimossa"

        fields = attendance_fields(
            request.attending,
            request.dietary_preference,
            request.dietary_notes,
        )
        if request.attending:
            fields["plus_one_name"] = request.plus_one_name
            fields["plus_one_dietary_preference"] = (
                _code(request.plus_one_dietary_preference) if request.plus_one_name else None
            )

        RegistrationService.save_attendance(db, guest, fields, family_members=members)
        logger.info(f"Guest {guest.id} updated (attending={request.attending})")
        return "Aggiornato con successo"

    @staticmethod
    def list_public(db: Session) -> List[Dict]:
        guests = GuestRepo.list_all(db)
        return [
            PublicGuestResponse.model_validate(guest).model_dump(by_alias=True, mode="json")
            for guest in guests
        ]

    @staticmethod
    def list_with_stats(db: Session) -> Tuple[List[Dict], Dict]:
        guests = GuestRepo.list_all(db)
        stats = StatsService.compute(guests)
        return (
            [
                GuestResponse.model_validate(guest).model_dump(by_alias=True, mode="json")
                for guest in guests
            ],
            stats.model_dump(by_alias=True),
        )
