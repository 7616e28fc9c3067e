# mypy: ignore-errors
# tests/v1/test_interest.py
"""Tests for interest expression and application status endpoints."""

from fastapi import status
from sqlalchemy import func, select

from campus_board.models import Application


def _interest_url(opportunity_id):
    return f"/api/v1/opportunities/{opportunity_id}/interest"


def _status_url(application_id):
    return f"/api/v1/applications/{application_id}/status"


def test_express_interest(client, carol_headers, opportunity) -> None:
    response = client.post(_interest_url(opportunity.id), headers=carol_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["user_id"] == "carol"
    assert data["opportunity_id"] == "op1"
    assert data["status"] == "pending"


def test_duplicate_interest(client, carol_headers, opportunity, db_session) -> None:
    client.post(_interest_url(opportunity.id), headers=carol_headers)

    response = client.post(_interest_url(opportunity.id), headers=carol_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "duplicate_interest"
    assert db_session.scalar(select(func.count()).select_from(Application)) == 1


def test_owner_cannot_express_interest(client, bob_headers, opportunity) -> None:
    response = client.post(_interest_url(opportunity.id), headers=bob_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "self_application"


def test_interest_in_unknown_opportunity(client, carol_headers) -> None:
    response = client.post(_interest_url("does-not-exist"), headers=carol_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_interest_requires_authentication(client, opportunity) -> None:
    response = client.post(_interest_url(opportunity.id))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_withdraw_and_reapply(client, carol_headers, opportunity) -> None:
    first = client.post(_interest_url(opportunity.id), headers=carol_headers).json()

    withdrawn = client.put(_status_url(first["id"]), json={"status": "withdrawn"}, headers=carol_headers)
    assert withdrawn.status_code == status.HTTP_200_OK
    assert withdrawn.json()["status"] == "withdrawn"

    second = client.post(_interest_url(opportunity.id), headers=carol_headers)
    assert second.status_code == status.HTTP_201_CREATED
    assert second.json()["id"] != first["id"]

    mine = client.get("/api/v1/applications/", headers=carol_headers).json()
    assert [a["status"] for a in mine] == ["pending", "withdrawn"]


def test_owner_accepts_once(client, bob_headers, carol_headers, opportunity) -> None:
    application = client.post(_interest_url(opportunity.id), headers=carol_headers).json()

    accepted = client.put(_status_url(application["id"]), json={"status": "accepted"}, headers=bob_headers)
    assert accepted.status_code == status.HTTP_200_OK
    assert accepted.json()["status"] == "accepted"

    again = client.put(_status_url(application["id"]), json={"status": "rejected"}, headers=bob_headers)
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json()["code"] == "invalid_transition"


def test_applicant_cannot_accept(client, carol_headers, opportunity) -> None:
    application = client.post(_interest_url(opportunity.id), headers=carol_headers).json()

    response = client.put(_status_url(application["id"]), json={"status": "accepted"}, headers=carol_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_owner_cannot_withdraw(client, bob_headers, carol_headers, opportunity) -> None:
    application = client.post(_interest_url(opportunity.id), headers=carol_headers).json()

    response = client.put(_status_url(application["id"]), json={"status": "withdrawn"}, headers=bob_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unknown_status_value(client, carol_headers, opportunity) -> None:
    application = client.post(_interest_url(opportunity.id), headers=carol_headers).json()

    response = client.put(_status_url(application["id"]), json={"status": "archived"}, headers=carol_headers)
    assert response.status_code == 422


def test_status_of_missing_application(client, bob_headers) -> None:
    response = client.put(_status_url(4242), json={"status": "accepted"}, headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_owner_lists_applications(client, alice_headers, bob_headers, carol_headers, opportunity) -> None:
    client.post(_interest_url(opportunity.id), headers=carol_headers)
    client.post(_interest_url(opportunity.id), headers=alice_headers)

    response = client.get(f"/api/v1/opportunities/{opportunity.id}/applications", headers=bob_headers)
    assert response.status_code == status.HTTP_200_OK
    assert sorted(a["user_id"] for a in response.json()) == ["alice", "carol"]

    forbidden = client.get(f"/api/v1/opportunities/{opportunity.id}/applications", headers=carol_headers)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
