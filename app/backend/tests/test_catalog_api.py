from __future__ import annotations

import uuid
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from factories import create_company, create_district, create_employee, create_shift_type, create_store


def test_company_and_district_lifecycle(client: TestClient) -> None:
    company = client.post("/api/v1/companies", json={"name": "Retail Co"})
    assert company.status_code == 201
    company_id = company.json()["id"]

    district = client.post("/api/v1/districts", json={"company_id": company_id, "name": " Center "})
    assert district.status_code == 201
    assert district.json()["name"] == "Center"

    listed = client.get("/api/v1/districts", params={"company_id": company_id})
    assert [item["name"] for item in listed.json()["items"]] == ["Center"]

    fetched = client.get(f"/api/v1/districts/{district.json()['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["company_id"] == company_id

    assert client.get(f"/api/v1/districts/{uuid.uuid4()}").status_code == 404
    assert client.post("/api/v1/districts", json={"company_id": str(uuid.uuid4()), "name": "X"}).status_code == 404


def test_employee_filters(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    center = create_district(db_session, company, name="Center")
    east = create_district(db_session, company, name="East")
    create_employee(db_session, company, full_name="Anna Nowak", district=center)
    create_employee(db_session, company, full_name="Boris Kowal", district=east)
    create_employee(db_session, company, full_name="Hanna Lis", district=center, is_active=False)

    everyone = client.get("/api/v1/employees")
    assert [item["full_name"] for item in everyone.json()["items"]] == ["Anna Nowak", "Boris Kowal", "Hanna Lis"]

    by_search = client.get("/api/v1/employees", params={"search": "ANNA"})
    assert [item["full_name"] for item in by_search.json()["items"]] == ["Anna Nowak", "Hanna Lis"]

    by_district = client.get("/api/v1/employees", params={"district_id": str(center.id), "status": "active"})
    assert [item["full_name"] for item in by_district.json()["items"]] == ["Anna Nowak"]

    inactive = client.get("/api/v1/employees", params={"status": "inactive"})
    assert [item["full_name"] for item in inactive.json()["items"]] == ["Hanna Lis"]

    assert client.get("/api/v1/employees", params={"status": "retired"}).status_code == 422


def test_search_treats_like_wildcards_literally(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    center = create_district(db_session, company, name="Center")
    create_employee(db_session, company, full_name="Anna", district=center)
    create_employee(db_session, company, full_name="100% Boris", district=center)

    response = client.get("/api/v1/employees", params={"search": "%"})

    assert [item["full_name"] for item in response.json()["items"]] == ["100% Boris"]


def test_create_and_update_employee(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    other_company = create_company(db_session, name="Other Co")
    center = create_district(db_session, company, name="Center")
    east = create_district(db_session, company, name="East")
    foreign = create_district(db_session, other_company, name="Foreign")

    created = client.post(
        "/api/v1/employees",
        json={"full_name": "Anna", "main_district_id": str(center.id)},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["company_id"] == str(company.id)
    assert body["is_active"] is True

    moved = client.patch(
        f"/api/v1/employees/{body['id']}",
        json={"main_district_id": str(east.id), "is_active": False},
    )
    assert moved.status_code == 200
    assert moved.json()["main_district_id"] == str(east.id)
    assert moved.json()["is_active"] is False

    cross_company = client.patch(
        f"/api/v1/employees/{body['id']}",
        json={"main_district_id": str(foreign.id)},
    )
    assert cross_company.status_code == 422

    unknown_district = client.post(
        "/api/v1/employees",
        json={"full_name": "Ghost", "main_district_id": str(uuid.uuid4())},
    )
    assert unknown_district.status_code == 422

    assert client.patch(f"/api/v1/employees/{uuid.uuid4()}", json={"full_name": "X"}).status_code == 404


def test_store_lifetime_must_be_ordered(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    center = create_district(db_session, company, name="Center")

    inverted = client.post(
        "/api/v1/stores",
        json={
            "name": "North",
            "district_id": str(center.id),
            "opened_at": "2025-05-20",
            "closed_at": "2025-05-10",
        },
    )
    assert inverted.status_code == 422

    created = client.post(
        "/api/v1/stores",
        json={"name": "North", "district_id": str(center.id), "opened_at": "2025-05-10"},
    )
    assert created.status_code == 201
    store_id = created.json()["id"]
    assert created.json()["opened_at"] == "2025-05-10"
    assert created.json()["closed_at"] is None

    bad_close = client.patch(f"/api/v1/stores/{store_id}", json={"closed_at": "2025-05-01"})
    assert bad_close.status_code == 422


def test_store_patch_can_clear_lifetime_bounds(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    center = create_district(db_session, company, name="Center")
    store = create_store(
        db_session,
        center,
        name="North",
        opened_at=date(2025, 1, 1),
        closed_at=date(2025, 6, 30),
    )

    renamed = client.patch(f"/api/v1/stores/{store.id}", json={"name": "North Mall"})
    assert renamed.status_code == 200
    assert renamed.json()["opened_at"] == "2025-01-01"
    assert renamed.json()["closed_at"] == "2025-06-30"

    reopened = client.patch(f"/api/v1/stores/{store.id}", json={"closed_at": None})
    assert reopened.status_code == 200
    assert reopened.json()["name"] == "North Mall"
    assert reopened.json()["opened_at"] == "2025-01-01"
    assert reopened.json()["closed_at"] is None


def test_store_filters(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    center = create_district(db_session, company, name="Center")
    east = create_district(db_session, company, name="East")
    create_store(db_session, center, name="North")
    create_store(db_session, center, name="Northgate", is_active=False)
    create_store(db_session, east, name="Harbor")

    by_search = client.get("/api/v1/stores", params={"search": "north"})
    assert [item["name"] for item in by_search.json()["items"]] == ["North", "Northgate"]

    active_center = client.get("/api/v1/stores", params={"district_id": str(center.id), "status": "active"})
    assert [item["name"] for item in active_center.json()["items"]] == ["North"]


def test_shift_type_codes_are_unique_per_company(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    other_company = create_company(db_session, name="Other Co")
    create_shift_type(db_session, company, code="M")

    duplicate = client.post(f"/api/v1/companies/{company.id}/shift-types", json={"code": "M"})
    assert duplicate.status_code == 409

    elsewhere = client.post(
        f"/api/v1/companies/{other_company.id}/shift-types",
        json={"code": "M", "color_key": "gray"},
    )
    assert elsewhere.status_code == 201
    assert elsewhere.json()["color_key"] == "gray"

    bad_color = client.post(
        f"/api/v1/companies/{company.id}/shift-types",
        json={"code": "N", "color_key": "purple"},
    )
    assert bad_color.status_code == 422

    listed = client.get(f"/api/v1/companies/{company.id}/shift-types")
    assert [item["code"] for item in listed.json()["items"]] == ["M"]

    assert client.get(f"/api/v1/companies/{uuid.uuid4()}/shift-types").status_code == 404


def test_shift_type_patch(client: TestClient, db_session: Session) -> None:
    company = create_company(db_session)
    morning = create_shift_type(db_session, company, code="M", color_key="green")
    create_shift_type(db_session, company, code="E")

    recolored = client.patch(f"/api/v1/shift-types/{morning.id}", json={"color_key": None})
    assert recolored.status_code == 200
    assert recolored.json()["color_key"] is None
    assert recolored.json()["code"] == "M"

    clash = client.patch(f"/api/v1/shift-types/{morning.id}", json={"code": "E"})
    assert clash.status_code == 409

    assert client.patch(f"/api/v1/shift-types/{uuid.uuid4()}", json={"code": "X"}).status_code == 404
