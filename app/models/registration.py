"""
Registration (RSVP response) model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class Registration(Base):
    __tablename__ = "registrations"
    
    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id"), unique=True, nullable=False)
    attending = Column(Boolean, nullable=False)
    dietary_preference = Column(String(50), default="nessuna")  # nessuna, vegetariano, vegano, allergie
    dietary_notes = Column(Text, nullable=True)
    plus_one_name = Column(String(255), nullable=True)
    plus_one_dietary_preference = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    guest = relationship("Guest", back_populates="registration")
    family_members = relationship(
        "FamilyMember",
        back_populates="registration",
        cascade="all, delete-orphan",
        order_by="FamilyMember.id"
    )
