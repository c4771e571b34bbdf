"""
Tests for the public endpoints
"""

import io

from PIL import Image

from conftest import seed_guest


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_guests_public_projection(client, db_session):
    seed_guest(db_session, "Bruno", email="bruno@example.com", attending=True,
               dietary_preference="vegano", plus_one_name="Carla", plus_one_dietary_preference="vegano",
               family=[("Figlio", "nessuna")])
    seed_guest(db_session, "Anna")

    response = client.get("/api/guests")

    assert response.status_code == 200
    guests = response.json()["guests"]
    assert [g["name"] for g in guests] == ["Anna", "Bruno"]
    assert guests[0]["registration"] is None

    bruno = guests[1]
    assert "email" not in bruno
    registration = bruno["registration"]
    assert registration["attending"] is True
    assert registration["dietaryPreference"] == "vegano"
    assert "plusOneName" not in registration
    assert "plusOneDietaryPreference" not in registration
    assert registration["familyMembers"][0]["name"] == "Figlio"
    assert set(registration["familyMembers"][0]) == {"id", "name", "dietaryPreference", "dietaryNotes"}


def test_list_guests_wrong_method(client):
    response = client.post("/api/guests", json={})

    assert response.status_code == 405


def test_invitation_qr(client):
    response = client.get("/api/invitation/qr.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    image = Image.open(io.BytesIO(response.content))
    assert image.format == "PNG"
    assert image.size[0] == image.size[1]


def test_import_template_download(client):
    response = client.get("/api/template/lista_invitati_template.xlsx")

    assert response.status_code == 200
    assert len(response.content) > 0
