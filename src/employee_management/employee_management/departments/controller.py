from __future__ import annotations

from flask import Flask

from ..common.http import ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate
    service = container.department_service

    @app.route(f"{prefix}/department", methods=["POST"], endpoint="department_add")
    @app.route(f"{prefix}/department/add", methods=["POST"], endpoint="department_add_alias")
    @gate.admin_required
    def add_department():
        data = request_data()
        dept = service.add_department(
            dept_name=data.get("name") or data.get("dep_name"),
            description=data.get("description"),
        )
        return ok(201, department=dept.to_dict())

    @app.route(f"{prefix}/department", methods=["GET"], endpoint="department_list")
    @gate.login_required
    def list_departments():
        return ok(departments=[d.to_dict() for d in service.list_departments()])

    @app.route(f"{prefix}/department/<int:dept_id>", methods=["GET"], endpoint="department_get")
    @gate.login_required
    def get_department(dept_id: int):
        return ok(department=service.get_department(dept_id).to_dict())

    @app.route(f"{prefix}/department/<int:dept_id>", methods=["PUT"], endpoint="department_update")
    @gate.admin_required
    def update_department(dept_id: int):
        data = request_data()
        dept = service.update_department(
            dept_id,
            dept_name=data.get("name") or data.get("dep_name"),
            description=data.get("description"),
        )
        return ok(department=dept.to_dict())

    @app.route(f"{prefix}/department/<int:dept_id>", methods=["DELETE"], endpoint="department_delete")
    @gate.admin_required
    def delete_department(dept_id: int):
        service.delete_department(dept_id)
        return ok(message="Department deleted successfully")
