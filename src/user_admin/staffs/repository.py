from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol, TypeVar

from ..core.ids import ID
from .model import Permission, Staff

R = TypeVar("R")


class StaffRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Staff]:
        raise NotImplementedError


class StaffPermissionDao(Protocol):
    """Permission lookup for one staff member.

    The caller decides the result shape: ``reducer`` receives the matching rows
    as an iterable and whatever it returns is handed back unchanged. No match is
    not an error; the reducer simply sees an empty iterable.
    """

    def select_by_staff_id(self, staff_id: ID[Staff], reducer: Callable[[Iterable[Permission]], R]) -> R:
        raise NotImplementedError
