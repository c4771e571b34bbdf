"""
Database models package
"""

from .guest import Guest
from .registration import Registration
from .family_member import FamilyMember

__all__ = ["Guest", "Registration", "FamilyMember"]
