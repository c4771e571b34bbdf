"""
Family member model
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base

class FamilyMember(Base):
    __tablename__ = "family_members"
    
    id = Column(Integer, primary_key=True, index=True)
    registration_id = Column(Integer, ForeignKey("registrations.id"), nullable=False)
    name = Column(String(255), nullable=False)
    dietary_preference = Column(String(50), default="nessuna")
    dietary_notes = Column(Text, nullable=True)
    
    # Relationships
    registration = relationship("Registration", back_populates="family_members")
