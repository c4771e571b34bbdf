"""
Pydantic schemas package
"""

from .common import *
from .guest import *

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "PasswordRequest",
    "DietaryPreference",
    "AddGuestRequest",
    "DeleteRegistrationRequest",
    "FamilyMemberInput",
    "UpdateGuestRequest",
    "RegisterRequest",
    "FamilyMemberResponse",
    "PublicRegistrationResponse",
    "PublicGuestResponse",
    "RegistrationResponse",
    "GuestResponse",
    "GuestStats"
]
