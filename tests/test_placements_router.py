"""
Unit and Integration tests for Placements Router
Run with: pytest tests/test_placements_router.py -v
"""

import uuid
from datetime import date

import pytest

PLACEMENTS_URL = "/api/v1/placements/"


class TestPlacementsAuth:
    """Test authentication requirements for placements endpoints"""

    def test_create_placement_requires_auth(self, client):
        """Creating a placement requires a bearer token"""
        response = client.post(PLACEMENTS_URL, json={})
        assert response.status_code == 401

    def test_get_placement_requires_auth(self, client):
        """Reading a placement requires a bearer token"""
        response = client.get(f"{PLACEMENTS_URL}1")
        assert response.status_code == 401

    def test_delete_placement_requires_auth(self, client):
        """Deleting a placement requires a bearer token"""
        response = client.delete(f"{PLACEMENTS_URL}1")
        assert response.status_code == 401


class TestCreatePlacement:
    """Test direct placement into a bed"""

    @pytest.fixture
    def bed_and_plant(self, garden):
        bed_id = garden.bed(width=48, height=48)
        plant_id = garden.plant(days_to_maturity_min=40, days_to_maturity_max=60)
        return bed_id, plant_id

    def _payload(self, bed_id, plant_id, **overrides):
        payload = {"bed_id": bed_id, "plant_id": plant_id, "x": 0, "y": 0, "w": 12, "h": 12}
        payload.update(overrides)
        return payload

    def test_create_placement(self, client, auth_headers, bed_and_plant):
        """Placement is created with a harvest estimate"""
        bed_id, plant_id = bed_and_plant
        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(bed_id, plant_id, count=3, direct_sowed_date="2025-04-01"),
            headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["bed"]["id"] == bed_id
        assert data["plant"]["id"] == plant_id
        assert data["count"] == 3
        assert data["succession_group_id"] is None
        assert data["expected_harvest_date"] == "2025-05-31"

    def test_harvest_date_from_transplant(self, client, auth_headers, bed_and_plant):
        """Transplant date anchors the estimate over seed start"""
        bed_id, plant_id = bed_and_plant
        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(
                bed_id, plant_id,
                transplanted_date="2025-04-10",
                seeds_started_date="2025-03-01"
            ),
            headers=auth_headers
        )
        assert response.json()["expected_harvest_date"] == "2025-06-09"

    def test_no_dates_no_harvest_estimate(self, client, auth_headers, bed_and_plant):
        """Undated placements get no harvest estimate"""
        bed_id, plant_id = bed_and_plant
        response = client.post(PLACEMENTS_URL, json=self._payload(bed_id, plant_id), headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["expected_harvest_date"] is None

    def test_touching_placements_allowed(self, client, garden, auth_headers, bed_and_plant):
        """Edge contact is not a collision"""
        bed_id, plant_id = bed_and_plant
        garden.placement(bed_id, plant_id, 0, 0)

        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(bed_id, plant_id, x=12),
            headers=auth_headers
        )
        assert response.status_code == 201

    def test_overlapping_placement_rejected(self, client, garden, auth_headers, bed_and_plant):
        """Overlapping placements are refused"""
        bed_id, plant_id = bed_and_plant
        garden.placement(bed_id, plant_id, 0, 0)

        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(bed_id, plant_id, x=6, y=6),
            headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ConstraintViolation"
        assert len(garden.placements_in(bed_id)) == 1

    def test_out_of_bounds_rejected(self, client, auth_headers, bed_and_plant):
        """Placements past the bed edge are refused"""
        bed_id, plant_id = bed_and_plant
        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(bed_id, plant_id, x=40),
            headers=auth_headers
        )
        assert response.status_code == 400

    def test_negative_coordinates_rejected(self, client, auth_headers, bed_and_plant):
        """Negative coordinates fail validation"""
        bed_id, plant_id = bed_and_plant
        response = client.post(
            PLACEMENTS_URL,
            json=self._payload(bed_id, plant_id, x=-1),
            headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_bed_of_another_user(self, client, garden, auth_headers):
        """Foreign beds return 404"""
        bed_id = garden.bed(user_id=uuid.uuid4())
        plant_id = garden.plant()

        response = client.post(PLACEMENTS_URL, json=self._payload(bed_id, plant_id), headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Bed not found"

    def test_unknown_plant(self, client, garden, auth_headers):
        """Unknown plants return 404"""
        bed_id = garden.bed()

        response = client.post(PLACEMENTS_URL, json=self._payload(bed_id, 9999), headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Plant not found"


class TestGetAndDeletePlacement:
    """Test reading and deleting placements"""

    def test_get_placement(self, client, garden, auth_headers):
        """Placement is returned with bed and plant"""
        bed_id = garden.bed(name="Herb Bed")
        plant_id = garden.plant(name="Dill")
        placement_id = garden.placement(bed_id, plant_id, 0, 0, direct_sowed_date=date(2025, 4, 1))

        response = client.get(f"{PLACEMENTS_URL}{placement_id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["bed"] == {"id": bed_id, "name": "Herb Bed"}
        assert data["plant"]["name"] == "Dill"
        assert data["direct_sowed_date"] == "2025-04-01"

    def test_get_placement_of_another_user(self, client, garden, auth_headers):
        """Placements of other users return 404"""
        other_user = uuid.uuid4()
        bed_id = garden.bed(user_id=other_user)
        plant_id = garden.plant(user_id=other_user)
        placement_id = garden.placement(bed_id, plant_id, 0, 0)

        response = client.get(f"{PLACEMENTS_URL}{placement_id}", headers=auth_headers)
        assert response.status_code == 404

    def test_get_placement_invalid_id(self, client, auth_headers):
        """Non-numeric IDs fail validation"""
        response = client.get(f"{PLACEMENTS_URL}not-a-number", headers=auth_headers)
        assert response.status_code == 400

    def test_delete_placement(self, client, garden, auth_headers):
        """Placement is deleted"""
        bed_id = garden.bed()
        plant_id = garden.plant()
        placement_id = garden.placement(bed_id, plant_id, 0, 0)

        response = client.delete(f"{PLACEMENTS_URL}{placement_id}", headers=auth_headers)

        assert response.status_code == 204
        assert garden.placements_in(bed_id) == []

    def test_delete_unknown_placement(self, client, garden, auth_headers):
        """Deleting an unknown placement returns 404"""
        response = client.delete(f"{PLACEMENTS_URL}9999", headers=auth_headers)
        assert response.status_code == 404


class TestSystemEndpoints:
    """Test root and health endpoints"""

    def test_root(self, client):
        """Root lists the available endpoints"""
        response = client.get("/")
        assert response.status_code == 200
        assert "succession" in response.json()["endpoints"]

    def test_health(self, client):
        """Health reports database status"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] in ["connected", "disconnected"]
