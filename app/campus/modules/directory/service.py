from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.campus.models import User
from app.campus.utils import parse_multi_value

if TYPE_CHECKING:
    from app.campus.repository import CampusStore


def list_my_students(store: "CampusStore", teaching_branches: Any, teaching_semesters: Any) -> list[User]:
    """
    Students whose branch AND semester both fall inside a teacher's assignments.
    Either list empty -> no students, and the store is not queried.
    """
    branches = parse_multi_value(teaching_branches)
    semesters = parse_multi_value(teaching_semesters)
    if not branches or not semesters:
        return []
    return store.list_students(branches, semesters)
