from datetime import timedelta

from voyagehub.services.reminder_service import run_reminders
from voyagehub.utils.date_utils import today


def _notify(client, headers, user_id, title="Heads up", type="system"):
    res = client.post(
        "/api/notifications",
        json={"userId": user_id, "type": type, "title": title, "message": "Check your trip"},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


def test_notification_flow(client, register_user) -> None:
    headers, user = register_user()
    first = _notify(client, headers, user["id"], "First")
    second = _notify(client, headers, user["id"], "Second")
    assert first["read"] is False

    listed = client.get("/api/notifications", headers=headers).json()
    assert {n["id"] for n in listed} == {first["id"], second["id"]}

    read = client.patch(f"/api/notifications/{first['id']}/read", headers=headers)
    assert read.status_code == 200
    assert read.json()["read"] is True

    assert client.patch("/api/notifications/read-all", headers=headers).status_code == 200
    assert all(n["read"] for n in client.get("/api/notifications", headers=headers).json())

    assert client.delete(f"/api/notifications/{second['id']}", headers=headers).status_code == 200
    assert [n["id"] for n in client.get("/api/notifications", headers=headers).json()] == [first["id"]]


def test_notifications_are_private(client, register_user) -> None:
    alice_headers, alice = register_user()
    eve_headers, _ = register_user(email="eve@example.com", first_name="Eve")
    note = _notify(client, alice_headers, alice["id"])

    assert client.get("/api/notifications", headers=eve_headers).json() == []
    assert client.patch(f"/api/notifications/{note['id']}/read", headers=eve_headers).status_code == 404
    assert client.delete(f"/api/notifications/{note['id']}", headers=eve_headers).status_code == 404


def test_notification_for_unknown_user(client, auth_headers) -> None:
    res = client.post(
        "/api/notifications",
        json={"userId": "missing", "type": "system", "title": "Hi", "message": "There"},
        headers=auth_headers,
    )
    assert res.status_code == 404


def test_reminder_job_creates_each_reminder_once(client, auth_headers, vacation) -> None:
    vacation_id = vacation["id"]
    expires = (today() + timedelta(days=10)).isoformat()
    upload = client.post(
        "/api/documents/upload",
        files={"file": ("visa.pdf", b"%PDF-1.4 visa", "application/pdf")},
        data={"vacationId": vacation_id, "title": "Visa", "type": "visa", "expirationDate": expires},
        headers=auth_headers,
    )
    assert upload.status_code == 201, upload.text

    client.patch(f"/api/budget/{vacation_id}", json={"totalBudget": 100}, headers=auth_headers)
    client.post(
        f"/api/budget/{vacation_id}/expenses",
        json={"title": "Hotel", "amount": 80, "date": "2026-06-02"},
        headers=auth_headers,
    )

    state = client.app.state
    created = client.portal.call(run_reminders, state.db.session_factory, state.settings)
    assert created == 2
    assert client.portal.call(run_reminders, state.db.session_factory, state.settings) == 0

    notifications = client.get("/api/notifications", headers=auth_headers).json()
    assert sorted(n["type"] for n in notifications) == ["budget", "reminder"]
    reminder = next(n for n in notifications if n["type"] == "reminder")
    assert reminder["title"] == "Visa expires soon"
    assert "in 10 days" in reminder["message"]


def test_reminders_respect_user_preference(client, auth_headers, vacation) -> None:
    client.patch(
        "/api/auth/profile", json={"preferences": {"notifications": {"reminders": False}}}, headers=auth_headers
    )
    client.patch(f"/api/budget/{vacation['id']}", json={"totalBudget": 10}, headers=auth_headers)
    client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "Taxi", "amount": 20, "date": "2026-06-02"},
        headers=auth_headers,
    )

    state = client.app.state
    assert client.portal.call(run_reminders, state.db.session_factory, state.settings) == 0
