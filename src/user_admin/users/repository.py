from __future__ import annotations

from typing import Optional, Protocol

from ..common.pagination import Page, Pageable
from ..core.ids import ID
from .model import User, UserCriteria


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this capability set (lookup by id, insert, update,
    bulk scan), never on a concrete database.
    """

    def get_by_id(self, user_id: ID[User]) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def select_all(self, criteria: UserCriteria, pageable: Optional[Pageable] = None) -> Page[User]:
        """Scan matching users ordered by id; ``pageable=None`` returns every match."""
        raise NotImplementedError

    def insert(self, user: User) -> User:
        raise NotImplementedError

    def update(self, user: User) -> User:
        raise NotImplementedError
