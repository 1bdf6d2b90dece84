from __future__ import annotations

from flask import Flask

from ..auth.gate import current_caller
from ..common.http import ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate
    service = container.leave_service

    @app.route(f"{prefix}/leave/add", methods=["POST"], endpoint="leave_add")
    @gate.login_required
    def add_leave():
        data = request_data()
        details = service.submit(
            caller=current_caller(),
            leave_type=data.get("leaveType"),
            from_date=data.get("fromDate"),
            to_date=data.get("toDate"),
            description=data.get("description"),
        )
        return ok(201, message="Leave request submitted successfully", leave=details.to_dict())

    @app.route(f"{prefix}/leave", methods=["GET"], endpoint="leave_list")
    @gate.admin_required
    def list_leaves():
        return ok(leaves=[d.to_dict() for d in service.list_all(caller=current_caller())])

    @app.route(f"{prefix}/leave/employee/me", methods=["GET"], endpoint="leave_list_mine")
    @gate.login_required
    def my_leaves():
        return ok(leaves=[d.to_dict() for d in service.list_mine(caller=current_caller())])

    @app.route(f"{prefix}/leave/<int:leave_id>", methods=["GET"], endpoint="leave_get")
    @gate.login_required
    def get_leave(leave_id: int):
        return ok(leave=service.get(caller=current_caller(), leave_id=leave_id).to_dict())

    @app.route(f"{prefix}/leave/<int:leave_id>", methods=["PUT"], endpoint="leave_transition")
    @gate.admin_required
    def update_leave(leave_id: int):
        details = service.transition(
            caller=current_caller(),
            leave_id=leave_id,
            new_status=request_data().get("status"),
        )
        return ok(message="Leave request updated successfully", leave=details.to_dict())

    @app.route(f"{prefix}/leave/<int:leave_id>", methods=["DELETE"], endpoint="leave_delete")
    @gate.login_required
    def delete_leave(leave_id: int):
        service.delete(caller=current_caller(), leave_id=leave_id)
        return ok(message="Leave request deleted successfully")
