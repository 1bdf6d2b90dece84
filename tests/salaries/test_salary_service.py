from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.employee_management.employee_management.core.enums import EmployeeStatus
from src.employee_management.employee_management.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.employee_management.employee_management.salaries.service import SalaryService


def test_add_salary_derives_net(world):
    emp = world.add_employee()
    service = SalaryService(world.salaries, world.employees)

    details = service.add_salary(
        caller=world.admin,
        employee_id=str(emp.employee_id),
        basic_salary="50000",
        allowances=5000,
        deductions="2000.50",
        pay_date="2026-02-28",
    )

    assert details.salary.net_salary == Decimal("52999.50")
    assert details.salary.pay_date == date(2026, 2, 28)
    assert details.to_dict()["netSalary"] == 52999.5
    assert details.employee.employee_id == emp.employee_id


def test_missing_allowances_and_deductions_default_to_zero(world):
    emp = world.add_employee()
    service = SalaryService(world.salaries, world.employees)

    details = service.add_salary(
        caller=world.admin, employee_id=emp.employee_id, basic_salary="3000", pay_date="2026-02-28"
    )

    assert details.salary.allowances == Decimal("0")
    assert details.salary.net_salary == Decimal("3000")


@pytest.mark.parametrize(
    "fields, error, message",
    [
        ({"basic_salary": ""}, ValidationError, "Employee ID, basic salary, and pay date are required"),
        ({"pay_date": None}, ValidationError, "are required"),
        ({"basic_salary": "lots"}, ValidationError, "Invalid basic salary"),
        ({"allowances": "x"}, ValidationError, "Invalid allowances"),
        ({"pay_date": "28/02/2026"}, ValidationError, "Invalid pay date"),
        ({"employee_id": "abc"}, ValidationError, "Invalid employee ID"),
        ({"employee_id": 999}, NotFoundError, "Employee not found"),
    ],
)
def test_add_salary_validation(world, fields, error, message):
    emp = world.add_employee()
    service = SalaryService(world.salaries, world.employees)
    payload = dict(employee_id=emp.employee_id, basic_salary="1000", allowances="0", deductions="0", pay_date="2026-02-28")
    payload.update(fields)

    with pytest.raises(error, match=message):
        service.add_salary(caller=world.admin, **payload)
    assert world.store.salaries == {}


def test_update_recomputes_net(world):
    emp = world.add_employee()
    service = SalaryService(world.salaries, world.employees)
    created = service.add_salary(
        caller=world.admin, employee_id=emp.employee_id, basic_salary="1000", allowances="100", pay_date="2026-01-31"
    )

    updated = service.update_salary(
        caller=world.admin,
        salary_id=created.salary.salary_id,
        basic_salary="1200",
        allowances="100",
        deductions="300",
        pay_date="2026-01-31",
    )

    assert updated.salary.net_salary == Decimal("1000")

    with pytest.raises(NotFoundError):
        service.update_salary(caller=world.admin, salary_id=999, basic_salary="1", pay_date="2026-01-31")


def test_admin_listing_hides_resigned_employees(world):
    bob = world.add_employee()
    ann = world.add_employee(name="Ann", email="ann@example.com", code="E002")
    service = SalaryService(world.salaries, world.employees)
    service.add_salary(caller=world.admin, employee_id=bob.employee_id, basic_salary="1", pay_date="2026-01-31")
    service.add_salary(caller=world.admin, employee_id=ann.employee_id, basic_salary="1", pay_date="2026-01-31")
    world.employees.set_status(ann.employee_id, EmployeeStatus.RESIGNED)

    listed = service.list_salaries(caller=world.admin)

    assert [d.employee.employee_id for d in listed] == [bob.employee_id]


def test_history_is_latest_first_and_self_or_admin(world):
    bob = world.add_employee()
    ann = world.add_employee(name="Ann", email="ann@example.com", code="E002")
    service = SalaryService(world.salaries, world.employees)
    for pay_date in ("2026-01-31", "2026-02-28"):
        service.add_salary(caller=world.admin, employee_id=bob.employee_id, basic_salary="10", pay_date=pay_date)

    history = service.list_for_employee(caller=world.caller_for(bob), employee_id=bob.employee_id)
    assert [d.salary.pay_date for d in history] == [date(2026, 2, 28), date(2026, 1, 31)]

    assert len(service.list_for_employee(caller=world.admin, employee_id=bob.employee_id)) == 2
    with pytest.raises(AuthorizationError):
        service.list_for_employee(caller=world.caller_for(ann), employee_id=bob.employee_id)


def test_mutations_are_admin_only(world):
    bob = world.add_employee()
    service = SalaryService(world.salaries, world.employees)
    created = service.add_salary(caller=world.admin, employee_id=bob.employee_id, basic_salary="10", pay_date="2026-01-31")

    with pytest.raises(AuthorizationError):
        service.add_salary(caller=world.caller_for(bob), employee_id=bob.employee_id, basic_salary="10", pay_date="2026-01-31")
    with pytest.raises(AuthorizationError):
        service.delete_salary(caller=world.caller_for(bob), salary_id=created.salary.salary_id)

    service.delete_salary(caller=world.admin, salary_id=created.salary.salary_id)
    with pytest.raises(NotFoundError):
        service.get_salary(caller=world.admin, salary_id=created.salary.salary_id)
