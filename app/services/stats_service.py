"""
Guest list statistics for the admin dashboard
"""

from typing import Dict, Iterable

from app.models import Guest
from app.schemas.guest import DietaryPreference, GuestStats

DEFAULT_DIETARY = DietaryPreference.NESSUNA.value


def _has_plus_one(registration) -> bool:
    return bool(registration.plus_one_name and registration.plus_one_name.strip())


def _tally(dietary_stats: Dict[str, int], preference) -> None:
    key = preference or DEFAULT_DIETARY
    if key in dietary_stats:
        dietary_stats[key] += 1


class StatsService:
    """Derives aggregate counts from loaded guests; nothing is stored"""

    @staticmethod
    def compute(guests: Iterable[Guest]) -> GuestStats:
        guests = list(guests)
        registrations = [g.registration for g in guests if g.registration is not None]
        attending = [r for r in registrations if r.attending is True]
        not_attending = [r for r in registrations if r.attending is False]

        plus_ones = sum(1 for r in attending if _has_plus_one(r))
        family_members_count = sum(len(r.family_members) for r in attending)

        dietary_stats = {pref.value: 0 for pref in DietaryPreference}
        for registration in attending:
            _tally(dietary_stats, registration.dietary_preference)
            if _has_plus_one(registration):
                _tally(dietary_stats, registration.plus_one_dietary_preference)
            for member in registration.family_members:
                _tally(dietary_stats, member.dietary_preference)

        return GuestStats(
            total_guests=len(guests),
            total_registered=len(registrations),
            pending_guests=len(guests) - len(registrations),
            total_confirmed_attending=len(attending),
            total_not_attending=len(not_attending),
            plus_ones=plus_ones,
            family_members_count=family_members_count,
            total_attending=len(attending) + plus_ones + family_members_count,
            dietary_stats=dietary_stats
        )
