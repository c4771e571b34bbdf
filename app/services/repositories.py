"""
Repository layer wrapping the SQLAlchemy queries used by the services.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from app.models import FamilyMember, Guest, Registration


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def _with_registration(db: Session):
        return db.query(Guest).options(
            selectinload(Guest.registration).selectinload(Registration.family_members)
        )

    @staticmethod
    def list_all(db: Session) -> List[Guest]:
        return GuestRepo._with_registration(db).order_by(Guest.name.asc()).all()

    @staticmethod
    def get_by_id(db: Session, guest_id: int) -> Optional[Guest]:
        return GuestRepo._with_registration(db).filter(Guest.id == guest_id).first()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.name == name).first()

    @staticmethod
    def list_by_ids(db: Session, guest_ids: Iterable[int]) -> List[Guest]:
        return GuestRepo._with_registration(db).filter(
            Guest.id.in_(list(guest_ids))
        ).order_by(Guest.name.asc()).all()

    @staticmethod
    def create(db: Session, name: str, email: Optional[str] = None) -> Guest:
        guest = Guest(name=name, email=email)
        db.add(guest)
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def rename(db: Session, guest: Guest, name: str) -> None:
        guest.name = name
        db.commit()


# -------- Registration repository --------

class RegistrationRepo:
    @staticmethod
    def create(db: Session, guest: Guest, **fields) -> Registration:
        registration = Registration(guest_id=guest.id, **fields)
        db.add(registration)
        db.commit()
        db.refresh(registration)
        return registration

    @staticmethod
    def update(db: Session, registration: Registration, **fields) -> Registration:
        for key, value in fields.items():
            setattr(registration, key, value)
        db.commit()
        db.refresh(registration)
        return registration

    @staticmethod
    def delete_family_members(db: Session, registration: Registration) -> None:
        db.query(FamilyMember).filter(
            FamilyMember.registration_id == registration.id
        ).delete(synchronize_session=False)
        db.commit()
        db.expire(registration, ["family_members"])

    @staticmethod
    def replace_family_members(
        db: Session,
        registration: Registration,
        members: Iterable[dict]
    ) -> List[FamilyMember]:
        """Delete every family member of the registration, then recreate the given set"""
        RegistrationRepo.delete_family_members(db, registration)
        created = [
            FamilyMember(registration_id=registration.id, **member)
            for member in members
        ]
        db.add_all(created)
        db.commit()
        db.expire(registration, ["family_members"])
        return created

    @staticmethod
    def delete(db: Session, registration: Registration) -> None:
        RegistrationRepo.delete_family_members(db, registration)
        guest = registration.guest
        db.delete(registration)
        db.commit()
        if guest is not None:
            db.expire(guest, ["registration"])
