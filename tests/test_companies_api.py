from __future__ import annotations

from decimal import Decimal

from app.db.postgres import DatabaseConnectionError, DatabaseQueryError


C1 = {
    "handle": "c1",
    "name": "C1",
    "description": "Desc1",
    "numEmployees": 1,
    "logoUrl": "http://c1.img",
}


def test_list_without_filters_has_no_where(client, fake_db) -> None:
    fake_db.respond("FROM companies", [C1])

    r = client.get("/companies")

    assert r.status_code == 200
    assert r.json() == {"companies": [C1]}
    sql, params = fake_db.last("FROM companies")
    assert "WHERE" not in sql
    assert sql.endswith("ORDER BY name")
    assert params == []


def test_list_with_filters(client, fake_db) -> None:
    fake_db.respond("FROM companies", [C1])

    r = client.get("/companies", params={"minEmployees": "1", "name": "c"})

    assert r.status_code == 200
    sql, params = fake_db.last("FROM companies")
    assert "WHERE name ILIKE $1 AND num_employees >= $2 ORDER BY name" in sql
    assert params == ["%c%", 1]


def test_list_rejects_unknown_filter(client, fake_db) -> None:
    r = client.get("/companies", params={"type": "12"})

    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid filters included"
    assert fake_db.calls == []


def test_list_rejects_inverted_employee_range(client, fake_db) -> None:
    r = client.get("/companies", params={"maxEmployees": "5", "minEmployees": "10"})

    assert r.status_code == 400
    assert r.json()["detail"] == "Max/min employees filters are not valid"


def test_list_rejects_non_integer_employee_filter(client, fake_db) -> None:
    r = client.get("/companies", params={"minEmployees": "lots"})

    assert r.status_code == 400


def test_list_maps_query_failure_to_500(client, fake_db) -> None:
    fake_db.respond("FROM companies", DatabaseQueryError("relation does not exist"))

    r = client.get("/companies")

    assert r.status_code == 500


def test_list_maps_connection_failure_to_503(client, fake_db) -> None:
    fake_db.respond("FROM companies", DatabaseConnectionError("Failed to connect"))

    r = client.get("/companies")

    assert r.status_code == 503


def test_get_includes_jobs(client, fake_db) -> None:
    fake_db.respond("FROM jobs WHERE company_handle", [
        {"id": 1, "title": "j1", "salary": 10, "equity": Decimal("0.02"), "companyHandle": "c1"},
    ])
    fake_db.respond("FROM companies WHERE handle", [C1])

    r = client.get("/companies/c1")

    assert r.status_code == 200
    body = r.json()["company"]
    assert body["handle"] == "c1"
    assert body["jobs"] == [
        {"id": 1, "title": "j1", "salary": 10, "equity": "0.02", "companyHandle": "c1"},
    ]


def test_get_missing_is_404(client, fake_db) -> None:
    r = client.get("/companies/nope")

    assert r.status_code == 404
    assert r.json()["detail"] == "No company: nope"


def test_create_requires_admin(client, fake_db, user_headers) -> None:
    payload = {"handle": "new", "name": "New", "description": "D"}

    assert client.post("/companies", json=payload).status_code == 401
    assert client.post("/companies", json=payload, headers=user_headers).status_code == 403
    assert fake_db.calls == []


def test_create(client, fake_db, admin_headers) -> None:
    created = {"handle": "new", "name": "New", "description": "D", "numEmployees": 10, "logoUrl": None}
    fake_db.respond("INSERT INTO companies", [created])

    r = client.post(
        "/companies",
        json={"handle": "new", "name": "New", "description": "D", "numEmployees": 10},
        headers=admin_headers,
    )

    assert r.status_code == 201
    assert r.json() == {"company": created}
    _sql, params = fake_db.last("INSERT INTO companies")
    assert params == ["new", "New", "D", 10, None]


def test_create_duplicate(client, fake_db, admin_headers) -> None:
    fake_db.respond("SELECT handle FROM companies WHERE handle", [{"handle": "c1"}])

    r = client.post(
        "/companies",
        json={"handle": "c1", "name": "C1", "description": "D"},
        headers=admin_headers,
    )

    assert r.status_code == 400
    assert r.json()["detail"] == "Duplicate company: c1"


def test_create_rejects_unknown_fields(client, fake_db, admin_headers) -> None:
    r = client.post(
        "/companies",
        json={"handle": "c9", "name": "C9", "description": "D", "ceo": "x"},
        headers=admin_headers,
    )

    assert r.status_code == 422


def test_partial_update_sql(client, fake_db, admin_headers) -> None:
    updated = {**C1, "name": "New", "numEmployees": 5}
    fake_db.respond("UPDATE companies", [updated])

    r = client.patch("/companies/c1", json={"name": "New", "numEmployees": 5}, headers=admin_headers)

    assert r.status_code == 200
    assert r.json() == {"company": updated}
    sql, params = fake_db.last("UPDATE companies")
    assert 'SET "name"=$1, "num_employees"=$2 WHERE handle = $3' in sql
    assert params == ["New", 5, "c1"]


def test_partial_update_can_null_a_field(client, fake_db, admin_headers) -> None:
    fake_db.respond("UPDATE companies", [{**C1, "logoUrl": None}])

    r = client.patch("/companies/c1", json={"logoUrl": None}, headers=admin_headers)

    assert r.status_code == 200
    _sql, params = fake_db.last("UPDATE companies")
    assert params == [None, "c1"]


def test_partial_update_with_empty_body(client, fake_db, admin_headers) -> None:
    r = client.patch("/companies/c1", json={}, headers=admin_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "No data"
    assert fake_db.calls == []


def test_partial_update_rejects_handle_change(client, fake_db, admin_headers) -> None:
    r = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)

    assert r.status_code == 422


def test_partial_update_missing_company(client, fake_db, admin_headers) -> None:
    r = client.patch("/companies/nope", json={"name": "X"}, headers=admin_headers)

    assert r.status_code == 404


def test_delete(client, fake_db, admin_headers) -> None:
    fake_db.respond("DELETE FROM companies", [{"handle": "c1"}])

    r = client.delete("/companies/c1", headers=admin_headers)

    assert r.status_code == 200
    assert r.json() == {"deleted": "c1"}


def test_delete_missing(client, fake_db, admin_headers) -> None:
    r = client.delete("/companies/nope", headers=admin_headers)

    assert r.status_code == 404


def test_partial_update_rejects_null_for_required_fields(client, fake_db, admin_headers) -> None:
    for body in ({"name": None}, {"description": None}):
        r = client.patch("/companies/c1", json=body, headers=admin_headers)
        assert r.status_code == 422, body
    assert fake_db.calls == []


def test_create_duplicate_name(client, fake_db, admin_headers) -> None:
    fake_db.respond("SELECT handle FROM companies WHERE name", [{"handle": "c1"}])

    r = client.post(
        "/companies",
        json={"handle": "c9", "name": "C1", "description": "D"},
        headers=admin_headers,
    )

    assert r.status_code == 400
    assert r.json()["detail"] == "Duplicate company name: C1"
    assert not any("INSERT" in sql for sql, _params in fake_db.calls)


def test_partial_update_to_taken_name(client, fake_db, admin_headers) -> None:
    fake_db.respond("SELECT handle FROM companies WHERE name", [{"handle": "c2"}])

    r = client.patch("/companies/c1", json={"name": "C2"}, headers=admin_headers)

    assert r.status_code == 400
    _sql, params = fake_db.last("SELECT handle FROM companies WHERE name")
    assert params == ["C2", "c1"]
    assert not any("UPDATE" in sql for sql, _params in fake_db.calls)
