from __future__ import annotations

from flask import Flask

from ..auth.gate import current_caller
from ..common.http import ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate
    service = container.salary_service

    @app.route(f"{prefix}/salary/add", methods=["POST"], endpoint="salary_add")
    @gate.admin_required
    def add_salary():
        data = request_data()
        details = service.add_salary(
            caller=current_caller(),
            employee_id=data.get("employeeId"),
            basic_salary=data.get("basicSalary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            pay_date=data.get("payDate"),
        )
        return ok(201, message="Salary added successfully", salary=details.to_dict())

    @app.route(f"{prefix}/salary", methods=["GET"], endpoint="salary_list")
    @gate.admin_required
    def list_salaries():
        return ok(salaries=[d.to_dict() for d in service.list_salaries(caller=current_caller())])

    @app.route(f"{prefix}/salary/<int:salary_id>", methods=["GET"], endpoint="salary_get")
    @gate.admin_required
    def get_salary(salary_id: int):
        return ok(salary=service.get_salary(caller=current_caller(), salary_id=salary_id).to_dict())

    @app.route(f"{prefix}/salary/<int:salary_id>", methods=["PUT"], endpoint="salary_update")
    @gate.admin_required
    def update_salary(salary_id: int):
        data = request_data()
        details = service.update_salary(
            caller=current_caller(),
            salary_id=salary_id,
            basic_salary=data.get("basicSalary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            pay_date=data.get("payDate"),
        )
        return ok(message="Salary updated successfully", salary=details.to_dict())

    @app.route(f"{prefix}/salary/<int:salary_id>", methods=["DELETE"], endpoint="salary_delete")
    @gate.admin_required
    def delete_salary(salary_id: int):
        service.delete_salary(caller=current_caller(), salary_id=salary_id)
        return ok(message="Salary deleted successfully")

    @app.route(f"{prefix}/salary/employee/<int:employee_id>", methods=["GET"], endpoint="salary_list_for_employee")
    @gate.login_required
    def employee_salaries(employee_id: int):
        salaries = service.list_for_employee(caller=current_caller(), employee_id=employee_id)
        return ok(salaries=[d.to_dict() for d in salaries])
