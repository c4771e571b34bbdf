"""
Tests for guest list statistics
"""

from app.models import FamilyMember, Guest, Registration
from app.services.stats_service import StatsService


def make_guest(name, attending=None, dietary=None, plus_one=None, plus_one_dietary=None, family=()):
    guest = Guest(name=name)
    if attending is not None:
        guest.registration = Registration(
            attending=attending,
            dietary_preference=dietary,
            plus_one_name=plus_one,
            plus_one_dietary_preference=plus_one_dietary,
            family_members=[FamilyMember(name=n, dietary_preference=p) for n, p in family],
        )
    return guest


def test_total_attending_counts_plus_ones_and_family():
    guests = [
        make_guest("Anna", attending=True, dietary="vegano"),
        make_guest("Bruno", attending=True, plus_one="Carla", plus_one_dietary="vegano"),
        make_guest("Dario", attending=True, dietary="vegetariano",
                   family=[("Figlio", "allergie"), ("Figlia", None)]),
        make_guest("Elena", attending=False, dietary="vegano"),
        make_guest("Franco"),
    ]

    stats = StatsService.compute(guests)

    assert stats.total_guests == 5
    assert stats.total_registered == 4
    assert stats.pending_guests == 1
    assert stats.total_confirmed_attending == 3
    assert stats.total_not_attending == 1
    assert stats.plus_ones == 1
    assert stats.family_members_count == 2
    assert stats.total_attending == 3 + 1 + 2
    assert stats.dietary_stats == {"nessuna": 2, "vegetariano": 1, "vegano": 2, "allergie": 1}


def test_dietary_tally_matches_attending_people():
    guests = [
        make_guest("Anna", attending=True, plus_one="Carla", family=[("Figlio", "vegano")]),
        make_guest("Bruno", attending=True, dietary="allergie"),
    ]

    stats = StatsService.compute(guests)

    assert sum(stats.dietary_stats.values()) == stats.total_attending


def test_blank_plus_one_is_not_counted():
    guests = [make_guest("Anna", attending=True, plus_one="   ", plus_one_dietary="vegano")]

    stats = StatsService.compute(guests)

    assert stats.plus_ones == 0
    assert stats.dietary_stats["vegano"] == 0


def test_declined_guests_contribute_nothing_to_attendance():
    guests = [make_guest("Anna", attending=False, plus_one="Carla", family=[("Figlio", "vegano")])]

    stats = StatsService.compute(guests)

    assert stats.total_attending == 0
    assert stats.plus_ones == 0
    assert stats.family_members_count == 0
    assert all(count == 0 for count in stats.dietary_stats.values())


def test_unknown_dietary_codes_are_not_tallied():
    guests = [make_guest("Anna", attending=True, dietary="paleo")]

    stats = StatsService.compute(guests)

    assert stats.total_attending == 1
    assert sum(stats.dietary_stats.values()) == 0


def test_empty_guest_list():
    stats = StatsService.compute([])

    assert stats.model_dump(by_alias=True) == {
        "totalGuests": 0,
        "totalRegistered": 0,
        "pendingGuests": 0,
        "totalConfirmedAttending": 0,
        "totalNotAttending": 0,
        "plusOnes": 0,
        "familyMembersCount": 0,
        "totalAttending": 0,
        "dietaryStats": {"nessuna": 0, "vegetariano": 0, "vegano": 0, "allergie": 0},
    }
