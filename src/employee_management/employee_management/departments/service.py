from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    """Use case: manage departments (admin)."""

    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get_department(self, dept_id: int) -> Department:
        dept = self._departments.get_by_id(int(dept_id))
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def add_department(self, *, dept_name: Optional[str], description: Optional[str]) -> Department:
        name = require_non_empty(dept_name, "Department name is required")
        dept_id = self._departments.create(dept_name=name, description=(description or "").strip() or None)
        logger.info("department %s created (%s)", dept_id, name)
        return self.get_department(dept_id)

    def update_department(self, dept_id: int, *, dept_name: Optional[str], description: Optional[str]) -> Department:
        name = require_non_empty(dept_name, "Department name is required")
        if not self._departments.update(
            int(dept_id), dept_name=name, description=(description or "").strip() or None
        ):
            raise NotFoundError("Department not found")
        return self.get_department(dept_id)

    def delete_department(self, dept_id: int) -> None:
        self.get_department(dept_id)
        in_use = self._departments.count_employees(int(dept_id))
        if in_use:
            raise ConflictError(f"Department still has {in_use} employee(s); reassign them first")
        self._departments.delete(int(dept_id))
        logger.info("department %s deleted", dept_id)
