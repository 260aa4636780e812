import sqlite3
from pathlib import Path


def _add_task(client, headers, vacation_id, title):
    res = client.post("/api/tasks", json={"vacationId": vacation_id, "title": title}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_vacation_creates_budget(client, auth_headers, vacation) -> None:
    assert vacation["status"] == "planning"
    assert vacation["destinations"][0]["name"] == "Lisbon"
    assert vacation["budget"]["totalBudget"] == 0
    assert vacation["budget"]["vacationId"] == vacation["id"]

    listed = client.get("/api/vacations", headers=auth_headers)
    assert listed.status_code == 200
    assert [v["id"] for v in listed.json()] == [vacation["id"]]


def test_start_date_must_precede_end_date(client, auth_headers) -> None:
    res = client.post(
        "/api/vacations",
        json={"title": "Backwards", "startDate": "2026-06-10", "endDate": "2026-06-01"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"]


def test_patch_rechecks_dates_against_stored_values(client, auth_headers, vacation) -> None:
    res = client.patch(
        f"/api/vacations/{vacation['id']}", json={"endDate": "2026-05-01"}, headers=auth_headers
    )
    assert res.status_code == 400

    res = client.patch(
        f"/api/vacations/{vacation['id']}",
        json={"status": "confirmed", "description": None},
        headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "confirmed"
    assert body["title"] == "Lisbon"
    assert body["endDate"] == "2026-06-10"


def test_blank_title_is_rejected_on_update(client, auth_headers, vacation) -> None:
    res = client.patch(f"/api/vacations/{vacation['id']}", json={"title": "   "}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "title"

    res = client.patch(f"/api/vacations/{vacation['id']}", json={"title": " Porto "}, headers=auth_headers)
    assert res.json()["title"] == "Porto"


def test_collaborator_can_view_but_not_delete(client, register_user, auth_headers) -> None:
    bob_headers, _ = register_user(email="bob@example.com", first_name="Bob")
    res = client.post(
        "/api/vacations",
        json={
            "title": "Shared trip",
            "startDate": "2026-07-01",
            "endDate": "2026-07-05",
            "collaborators": ["Bob@Example.com"],
        },
        headers=auth_headers,
    )
    vacation_id = res.json()["id"]

    assert client.get(f"/api/vacations/{vacation_id}", headers=bob_headers).status_code == 200
    assert client.delete(f"/api/vacations/{vacation_id}", headers=bob_headers).status_code == 404
    assert client.get(f"/api/vacations/{vacation_id}", headers=auth_headers).status_code == 200


def test_other_users_vacation_is_not_found(client, register_user, vacation) -> None:
    eve_headers, _ = register_user(email="eve@example.com", first_name="Eve")
    assert client.get(f"/api/vacations/{vacation['id']}", headers=eve_headers).status_code == 404
    assert client.patch(
        f"/api/vacations/{vacation['id']}", json={"title": "Mine now"}, headers=eve_headers
    ).status_code == 404


def test_cascade_delete_removes_everything(client, settings, auth_headers, vacation) -> None:
    vacation_id = vacation["id"]
    for title in ("Book flights", "Pack", "Renew passport"):
        _add_task(client, auth_headers, vacation_id, title)

    upload = client.post(
        "/api/documents/upload",
        files={"file": ("ticket.pdf", b"%PDF-1.4 ticket", "application/pdf")},
        data={"vacationId": vacation_id, "title": "Flight", "type": "ticket"},
        headers=auth_headers,
    )
    assert upload.status_code == 201, upload.text
    stored_file = Path(settings.UPLOAD_DIR) / "documents" / upload.json()["fileUrl"].rsplit("/", 1)[-1]
    assert stored_file.exists()

    for amount in (120, 80):
        res = client.post(
            f"/api/budget/{vacation_id}/expenses",
            json={"title": "Dinner", "amount": amount, "date": "2026-06-02"},
            headers=auth_headers,
        )
        assert res.status_code == 201, res.text

    res = client.delete(f"/api/vacations/{vacation_id}", headers=auth_headers)
    assert res.status_code == 200, res.text
    assert res.json()["deleted"] == {
        "tasks": 3,
        "documents": 1,
        "expenses": 2,
        "budgets": 1,
        "vacations": 1,
    }

    assert client.get(f"/api/vacations/{vacation_id}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/tasks?vacationId={vacation_id}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/budget/{vacation_id}", headers=auth_headers).status_code == 404
    assert not stored_file.exists()


def test_cascade_delete_of_missing_vacation_is_not_found(client, auth_headers) -> None:
    res = client.delete("/api/vacations/does-not-exist", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["detail"] == "Vacation not found or unauthorized"


def test_failed_cascade_delete_rolls_back(client, settings, auth_headers, vacation) -> None:
    vacation_id = vacation["id"]
    _add_task(client, auth_headers, vacation_id, "Book flights")

    # A row elsewhere still pointing at the vacation makes the final delete fail
    db_path = settings.DATABASE_URL.split("///", 1)[1]
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "CREATE TABLE itinerary_notes (id TEXT PRIMARY KEY, vacation_id TEXT REFERENCES vacations(id))"
        )
        conn.execute("INSERT INTO itinerary_notes VALUES ('n1', ?)", (vacation_id,))
        conn.commit()
    finally:
        conn.close()

    res = client.delete(f"/api/vacations/{vacation_id}", headers=auth_headers)
    assert res.status_code == 500

    assert client.get(f"/api/vacations/{vacation_id}", headers=auth_headers).status_code == 200
    tasks = client.get(f"/api/tasks?vacationId={vacation_id}", headers=auth_headers)
    assert len(tasks.json()) == 1
    assert client.get(f"/api/budget/{vacation_id}", headers=auth_headers).status_code == 200
