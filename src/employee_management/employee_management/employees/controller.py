from __future__ import annotations

from flask import Flask, abort, request, send_from_directory

from ..auth.gate import current_caller
from ..common.http import ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate
    service = container.employee_service

    @app.route(f"{prefix}/employee", methods=["GET"], endpoint="employee_list")
    @gate.admin_required
    def list_employees():
        employees = service.list_employees(caller=current_caller())
        return ok(employees=[e.to_dict() for e in employees])

    @app.route(f"{prefix}/employee/<int:employee_id>", methods=["GET"], endpoint="employee_get")
    @gate.login_required
    def get_employee(employee_id: int):
        details = service.get_employee(caller=current_caller(), employee_id=employee_id)
        return ok(employee=details.to_dict())

    @app.route(f"{prefix}/employee/add", methods=["POST"], endpoint="employee_add")
    @gate.admin_required
    def add_employee():
        details = service.add_employee(
            caller=current_caller(),
            data=request_data(),
            image=request.files.get("image"),
        )
        return ok(201, message="Employee created", employee=details.to_dict())

    @app.route(f"{prefix}/employee/profile", methods=["PUT"], endpoint="employee_update_profile")
    @gate.login_required
    def update_profile():
        details = service.update_employee(
            caller=current_caller(),
            employee_id=None,
            data=request_data(),
            image=request.files.get("image"),
        )
        return ok(message="Employee updated successfully", employee=details.to_dict())

    @app.route(f"{prefix}/employee/<int:employee_id>", methods=["PUT"], endpoint="employee_update")
    @gate.login_required
    def update_employee(employee_id: int):
        details = service.update_employee(
            caller=current_caller(),
            employee_id=employee_id,
            data=request_data(),
            image=request.files.get("image"),
        )
        return ok(message="Employee updated successfully", employee=details.to_dict())

    @app.route(f"{prefix}/employee/<int:employee_id>", methods=["DELETE"], endpoint="employee_delete")
    @gate.admin_required
    def delete_employee(employee_id: int):
        service.delete_employee(caller=current_caller(), employee_id=employee_id)
        return ok(message="Employee and all related details deleted successfully")

    @app.route("/public/uploads/<path:filename>", methods=["GET"], endpoint="profile_image")
    def profile_image(filename: str):
        if container.images is None:
            abort(404)
        return send_from_directory(container.images.folder.resolve(), filename)
