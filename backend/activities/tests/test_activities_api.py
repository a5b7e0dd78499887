from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from activities.models import Activity

User = get_user_model()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username="admin",
        email="admin@portal.test",
        password="examplepass",
        is_staff=True,
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(admin_user)
    return client


@pytest.fixture
def open_activity(db):
    return Activity.objects.create(title="Summer Study Trip", price=Decimal("980.00"))


@pytest.fixture
def closed_activity(db):
    return Activity.objects.create(title="Winter Camp", price=Decimal("500.00"), is_active=False)


def test_public_list_only_shows_active(open_activity, closed_activity):
    response = APIClient().get("/api/activities/")

    assert response.status_code == 200
    titles = [item["title"] for item in response.json()]
    assert titles == ["Summer Study Trip"]
    assert response.json()[0]["price"] == "980.00"


def test_public_retrieve_and_missing(open_activity):
    client = APIClient()

    response = client.get(f"/api/activities/{open_activity.id}/")
    assert response.status_code == 200
    assert response.json()["title"] == "Summer Study Trip"

    missing = client.get("/api/activities/9999/")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Activity not found."


def test_admin_lists_all_activities(admin_client, open_activity, closed_activity):
    response = admin_client.get("/api/activities/all/")

    assert response.status_code == 200
    assert {item["title"] for item in response.json()} == {"Summer Study Trip", "Winter Camp"}


def test_anonymous_cannot_list_all_or_create(open_activity):
    client = APIClient()

    assert client.get("/api/activities/all/").status_code == 401
    response = client.post("/api/activities/", {"title": "Nope", "price": "1.00"}, format="json")
    assert response.status_code == 401


def test_admin_creates_activity_with_creator(admin_client, admin_user):
    response = admin_client.post(
        "/api/activities/",
        {"title": "Lab Visit", "price": "120.50", "contact_person": "Ms. Li"},
        format="json",
    )

    assert response.status_code == 201
    activity = Activity.objects.get(title="Lab Visit")
    assert activity.price == Decimal("120.50")
    assert activity.created_by == admin_user
    assert activity.is_active is True


def test_admin_closes_activity(admin_client, open_activity):
    response = admin_client.patch(
        f"/api/activities/{open_activity.id}/",
        {"is_active": False},
        format="json",
    )

    assert response.status_code == 200
    open_activity.refresh_from_db()
    assert open_activity.is_active is False


def test_activities_cannot_be_deleted(admin_client, open_activity):
    response = admin_client.delete(f"/api/activities/{open_activity.id}/")

    assert response.status_code == 405
    assert Activity.objects.filter(pk=open_activity.pk).exists()
