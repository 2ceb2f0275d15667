"""Row factories shared by API tests."""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from roster.models.entities import Assignment, Company, District, Employee, ShiftType, Store


def create_company(db: Session, *, name: str = "Retail Co") -> Company:
    row = Company(name=name)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_district(db: Session, company: Company, *, name: str) -> District:
    row = District(company_id=company.id, name=name)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_employee(
    db: Session,
    company: Company,
    *,
    full_name: str,
    district: District | None = None,
    is_active: bool = True,
) -> Employee:
    row = Employee(
        company_id=company.id,
        full_name=full_name,
        main_district_id=district.id if district else None,
        is_active=is_active,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_store(
    db: Session,
    district: District,
    *,
    name: str,
    opened_at: date | None = None,
    closed_at: date | None = None,
    is_active: bool = True,
) -> Store:
    row = Store(
        company_id=district.company_id,
        district_id=district.id,
        name=name,
        is_active=is_active,
        opened_at=opened_at,
        closed_at=closed_at,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_shift_type(db: Session, company: Company, *, code: str, color_key: str | None = None) -> ShiftType:
    row = ShiftType(company_id=company.id, code=code, color_key=color_key)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_assignment(
    db: Session,
    *,
    employee: Employee,
    store: Store,
    day: date,
    shift_type: ShiftType | None = None,
    is_substitution: bool = False,
) -> Assignment:
    row = Assignment(
        company_id=store.company_id,
        employee_id=employee.id,
        store_id=store.id,
        date=day,
        shift_type_id=shift_type.id if shift_type else None,
        is_substitution=is_substitution,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
