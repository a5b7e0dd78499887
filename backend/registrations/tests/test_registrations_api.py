from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from activities.models import Activity
from payments.models import Payment
from registrations.models import Registration

User = get_user_model()


@pytest.fixture
def activity(db):
    return Activity.objects.create(title="Summer Study Trip", price=Decimal("980.00"))


@pytest.fixture
def other_activity(db):
    return Activity.objects.create(title="Museum Day", price=Decimal("150.00"))


@pytest.fixture
def admin_client(db):
    user = User.objects.create_user(username="admin", password="examplepass", is_staff=True)
    client = APIClient()
    client.force_authenticate(user)
    return client


def _payload(activity, **overrides):
    payload = {
        "activity_id": activity.id,
        "student_name": "测试学生",
        "student_gender": "男",
        "student_school": "No. 1 Middle School",
        "student_grade": "Grade 8",
        "student_class": "Class 3",
        "guardian_name": "Parent",
        "guardian_phone": "13800000000",
    }
    payload.update(overrides)
    return payload


def _make_registration(activity, **overrides):
    fields = {
        "activity": activity,
        "student_name": "Student",
        "student_gender": Registration.FEMALE,
        "student_school": "School",
        "student_grade": "Grade 7",
        "student_class": "Class 1",
        "guardian_name": "Guardian",
        "guardian_phone": "13900000000",
        "payment_amount": activity.price,
    }
    fields.update(overrides)
    return Registration.objects.create(**fields)


@pytest.mark.django_db
def test_public_submission_creates_pending_registration(activity):
    client = APIClient()

    response = client.post(
        "/api/registrations/",
        _payload(activity, remarks="Vegetarian"),
        format="json",
        HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1",
    )

    assert response.status_code == 201
    registration = Registration.objects.get(pk=response.json()["registration_id"])
    assert registration.payment_amount == Decimal("980.00")
    assert registration.payment_status == Registration.PENDING
    assert registration.ip_address == "203.0.113.7"
    assert registration.remarks == "Vegetarian"
    assert registration.student_id_card == ""


@pytest.mark.django_db
def test_missing_required_fields_rejected(activity):
    payload = _payload(activity)
    payload.pop("guardian_phone")
    payload["student_name"] = ""

    response = APIClient().post("/api/registrations/", payload, format="json")

    assert response.status_code == 400
    body = response.json()
    assert "guardian_phone" in body
    assert "student_name" in body
    assert Registration.objects.count() == 0


@pytest.mark.django_db
def test_closed_activity_returns_400(activity):
    activity.is_active = False
    activity.save()

    response = APIClient().post("/api/registrations/", _payload(activity), format="json")

    assert response.status_code == 400
    assert response.json()["detail"] == "Activity is closed."
    assert Registration.objects.count() == 0


@pytest.mark.django_db
def test_unknown_activity_returns_404(db):
    payload = _payload(Activity(id=999))

    response = APIClient().post("/api/registrations/", payload, format="json")

    assert response.status_code == 404
    assert response.json()["detail"] == "Activity not found."


@pytest.mark.django_db
def test_public_retrieve(activity):
    registration = _make_registration(activity)

    response = APIClient().get(f"/api/registrations/{registration.id}/")

    assert response.status_code == 200
    data = response.json()
    assert data["activity_title"] == "Summer Study Trip"
    assert data["payment_amount"] == "980.00"
    assert data["payment_status"] == "pending"

    missing = APIClient().get("/api/registrations/9999/")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Registration not found."


@pytest.mark.django_db
def test_search_requires_admin(activity):
    _make_registration(activity)

    response = APIClient().get("/api/registrations/")

    assert response.status_code == 401


@pytest.mark.django_db
def test_admin_search_filters_and_pages(admin_client, activity, other_activity):
    _make_registration(activity, student_name="Zhang Wei")
    _make_registration(activity, student_name="Zhang Min", payment_status=Registration.PAID)
    _make_registration(other_activity, student_name="Li Na")

    response = admin_client.get("/api/registrations/", {"activity": activity.id, "student_name": "zhang"})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["page_size"] == 20
    assert body["total_pages"] == 1
    assert {item["student_name"] for item in body["items"]} == {"Zhang Wei", "Zhang Min"}

    paid = admin_client.get("/api/registrations/", {"payment_status": "paid"}).json()
    assert [item["student_name"] for item in paid["items"]] == ["Zhang Min"]

    paged = admin_client.get("/api/registrations/", {"page_size": 2, "page": 2}).json()
    assert paged["total"] == 3
    assert paged["total_pages"] == 2
    assert len(paged["items"]) == 1


@pytest.mark.django_db
def test_admin_search_past_last_page_is_empty(admin_client, activity):
    _make_registration(activity)

    response = admin_client.get("/api/registrations/", {"page": 5})

    assert response.status_code == 200
    assert response.json() == {"items": [], "total": 1, "page": 5, "page_size": 20, "total_pages": 1}


@pytest.mark.django_db
def test_admin_search_by_date_range(admin_client, activity):
    old = _make_registration(activity, student_name="Old")
    Registration.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=30))
    _make_registration(activity, student_name="Recent")

    start = (timezone.localdate() - timedelta(days=1)).isoformat()
    body = admin_client.get("/api/registrations/", {"start_date": start}).json()

    assert [item["student_name"] for item in body["items"]] == ["Recent"]


@pytest.mark.django_db
def test_admin_delete_keeps_payment_record(admin_client, activity):
    registration = _make_registration(activity)
    payment = Payment.objects.create(registration=registration, amount=registration.payment_amount)

    response = admin_client.delete(f"/api/registrations/{registration.id}/")

    assert response.status_code == 204
    assert not Registration.objects.filter(pk=registration.pk).exists()
    payment.refresh_from_db()
    assert payment.registration is None


@pytest.mark.django_db
def test_admin_batch_delete(admin_client, activity):
    first = _make_registration(activity)
    second = _make_registration(activity)
    keep = _make_registration(activity)

    response = admin_client.post(
        "/api/registrations/batch-delete/",
        {"ids": [first.id, second.id]},
        format="json",
    )

    assert response.status_code == 200
    assert response.json()["deleted"] == 2
    assert list(Registration.objects.values_list("id", flat=True)) == [keep.id]
