"""
Guest and registration Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Optional
from pydantic import BeforeValidator

from .common import CamelModel, PasswordRequest

class DietaryPreference(str, Enum):
    """Dietary preference codes stored on registrations"""
    NESSUNA = "nessuna"
    VEGETARIANO = "vegetariano"
    VEGANO = "vegano"
    ALLERGIE = "allergie"

def _blank_to_none(value):
    if isinstance(value, str) and value.strip() == "":
        return None
    return value

OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
OptionalDiet = Annotated[Optional[DietaryPreference], BeforeValidator(_blank_to_none)]

# -------- Requests --------

class AddGuestRequest(PasswordRequest):
    """Admin request to add a guest"""
    name: Optional[str] = None
    email: Optional[str] = None

class DeleteRegistrationRequest(PasswordRequest):
    """Admin request to delete a guest's registration"""
    guest_id: Optional[int] = None

class FamilyMemberInput(CamelModel):
    """Family member as submitted by the admin panel"""
    name: Optional[str] = None
    dietary_preference: OptionalDiet = None
    dietary_notes: OptionalText = None

class UpdateGuestRequest(PasswordRequest):
    """Admin request to rename a guest and replace its registration.

    ``attending`` is tri-state: an explicit ``null`` removes the
    registration, while omitting the key leaves it untouched.
    """
    guest_id: Optional[int] = None
    guest_name: Optional[str] = None
    registration_id: Optional[int] = None
    attending: Optional[bool] = None
    dietary_preference: OptionalDiet = None
    dietary_notes: OptionalText = None
    plus_one_name: OptionalText = None
    plus_one_dietary_preference: OptionalDiet = None
    family_members: Optional[List[FamilyMemberInput]] = None

class RegisterRequest(CamelModel):
    """Public RSVP submission for one or more guests"""
    guest_ids: Optional[List[int]] = None
    attending: Optional[bool] = None
    dietary_preference: OptionalDiet = None
    dietary_notes: OptionalText = None

# -------- Responses --------

class FamilyMemberResponse(CamelModel):
    id: int
    name: str
    dietary_preference: Optional[str] = None
    dietary_notes: Optional[str] = None

class PublicRegistrationResponse(CamelModel):
    """Registration as shown on the public RSVP page"""
    id: int
    attending: bool
    dietary_preference: Optional[str] = None
    dietary_notes: Optional[str] = None
    family_members: List[FamilyMemberResponse] = []

class PublicGuestResponse(CamelModel):
    id: int
    name: str
    registration: Optional[PublicRegistrationResponse] = None

class RegistrationResponse(PublicRegistrationResponse):
    """Full registration for the admin guest list"""
    guest_id: int
    plus_one_name: Optional[str] = None
    plus_one_dietary_preference: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class GuestResponse(CamelModel):
    """Guest response schema"""
    id: int
    name: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    registration: Optional[RegistrationResponse] = None

class GuestStats(CamelModel):
    """Aggregate counts shown on the admin dashboard"""
    total_guests: int
    total_registered: int
    pending_guests: int
    total_confirmed_attending: int
    total_not_attending: int
    plus_ones: int
    family_members_count: int
    total_attending: int
    dietary_stats: Dict[str, int]
