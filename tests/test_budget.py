def _set_budget(client, headers, vacation_id, total, categories):
    res = client.patch(
        f"/api/budget/{vacation_id}",
        json={"totalBudget": total, "currency": "eur", "categories": categories},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    return res.json()


def _add_expense(client, headers, vacation_id, amount, category_id=None, date="2026-06-02"):
    payload = {"title": "Spend", "amount": amount, "date": date}
    if category_id:
        payload["categoryId"] = category_id
    res = client.post(f"/api/budget/{vacation_id}/expenses", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_budget_summary_from_expenses(client, auth_headers, vacation) -> None:
    vacation_id = vacation["id"]
    budget = _set_budget(
        client, auth_headers, vacation_id, 1000, [{"id": "c1", "name": "Food", "allocated": 400, "color": "#f90"}]
    )
    assert budget["currency"] == "EUR"
    assert budget["categories"][0]["allocated"] == 400

    _add_expense(client, auth_headers, vacation_id, 350, "c1", date="2026-06-01")
    _add_expense(client, auth_headers, vacation_id, 100, "c2", date="2026-06-03")

    res = client.get(f"/api/budget/{vacation_id}/summary", headers=auth_headers)
    assert res.status_code == 200
    summary = res.json()
    assert summary["totalSpent"] == 450
    assert summary["remaining"] == 550
    assert summary["utilizationPercent"] == 45
    assert summary["alertLevel"] == "ok"
    assert summary["uncategorizedSpent"] == 100
    assert summary["categories"][0]["spent"] == 350
    assert summary["categories"][0]["utilizationPercent"] == 87.5

    full = client.get(f"/api/budget/{vacation_id}", headers=auth_headers).json()
    assert [e["date"] for e in full["expenses"]] == ["2026-06-03", "2026-06-01"]
    assert full["summary"] == summary


def test_over_budget_alert(client, auth_headers, vacation) -> None:
    _set_budget(client, auth_headers, vacation["id"], 100, [])
    _add_expense(client, auth_headers, vacation["id"], 120.5)

    summary = client.get(f"/api/budget/{vacation['id']}/summary", headers=auth_headers).json()
    assert summary["alertLevel"] == "over-budget"
    assert summary["remaining"] == -20.5


def test_expense_update_and_delete(client, auth_headers, vacation) -> None:
    expense = _add_expense(client, auth_headers, vacation["id"], 40)

    res = client.patch(
        f"/api/budget/expenses/{expense['id']}", json={"amount": 55.25, "title": "Museum"}, headers=auth_headers
    )
    assert res.status_code == 200
    assert res.json()["amount"] == 55.25
    assert res.json()["title"] == "Museum"
    assert res.json()["date"] == "2026-06-02"

    assert client.delete(f"/api/budget/expenses/{expense['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/budget/{vacation['id']}", headers=auth_headers).json()["expenses"] == []
    assert client.delete(f"/api/budget/expenses/{expense['id']}", headers=auth_headers).status_code == 404


def test_expense_amount_must_be_positive(client, auth_headers, vacation) -> None:
    res = client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "Refund", "amount": 0, "date": "2026-06-02"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "amount"


def test_duplicate_category_ids_are_rejected(client, auth_headers, vacation) -> None:
    res = client.patch(
        f"/api/budget/{vacation['id']}",
        json={"categories": [{"id": "c1", "name": "Food"}, {"id": "c1", "name": "Drinks"}]},
        headers=auth_headers,
    )
    assert res.status_code == 400


def test_budget_of_other_users_vacation_is_hidden(client, register_user, vacation) -> None:
    eve_headers, _ = register_user(email="eve@example.com", first_name="Eve")
    assert client.get(f"/api/budget/{vacation['id']}", headers=eve_headers).status_code == 404
    assert client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "x", "amount": 1, "date": "2026-06-02"},
        headers=eve_headers,
    ).status_code == 404


def test_amounts_must_be_whole_cents(client, auth_headers, vacation) -> None:
    res = client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "Gum", "amount": 0.001, "date": "2026-06-02"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "amount"

    res = client.patch(
        f"/api/budget/{vacation['id']}",
        json={"categories": [{"id": "c1", "name": "Food", "allocated": 12.345}]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "categories.0.allocated"
    assert client.get(f"/api/budget/{vacation['id']}", headers=auth_headers).json()["expenses"] == []


def test_oversized_amounts_are_rejected(client, auth_headers, vacation) -> None:
    res = client.patch(f"/api/budget/{vacation['id']}", json={"totalBudget": 1e27}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "totalBudget"

    res = client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "Yacht", "amount": "1e30", "date": "2026-06-02"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "amount"


def test_expense_currency_must_be_iso_code(client, auth_headers, vacation) -> None:
    res = client.post(
        f"/api/budget/{vacation['id']}/expenses",
        json={"title": "Cafe", "amount": 4, "currency": "euros", "date": "2026-06-02"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "currency"

    expense = _add_expense(client, auth_headers, vacation["id"], 4)
    res = client.patch(f"/api/budget/expenses/{expense['id']}", json={"currency": "eu"}, headers=auth_headers)
    assert res.status_code == 400

    res = client.patch(f"/api/budget/expenses/{expense['id']}", json={"currency": "gbp"}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["currency"] == "GBP"
