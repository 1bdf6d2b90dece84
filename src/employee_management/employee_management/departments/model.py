from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    dept_id: int
    dept_name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.dept_id, "name": self.dept_name, "description": self.description or ""}
