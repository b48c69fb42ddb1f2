from __future__ import annotations

import logging
from typing import List, Optional

from ..common.pagination import Page, Pageable
from ..core.exceptions import NoDataFoundError, ValidationError
from ..core.ids import ID
from .model import User, UserCriteria
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: register, search and edit users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def find_all(self, criteria: UserCriteria, pageable: Pageable) -> Page[User]:
        return self._users.select_all(criteria, pageable)

    def find_all_unpaged(self, criteria: Optional[UserCriteria] = None) -> List[User]:
        return list(self._users.select_all(criteria or UserCriteria(), None).data)

    def find_by_id(self, user_id: ID[User]) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NoDataFoundError(f"User not found: id={user_id}")
        return user

    def create(self, user: User) -> User:
        if user.id is not None:
            raise ValidationError("A new user must not carry an id")
        if not user.password:
            raise ValidationError("Password is required")
        self._require_unique_email(user)

        created = self._users.insert(user)
        logger.info("created user id=%s", created.id)
        return created

    def update(self, user: User) -> User:
        if user.id is None:
            raise ValidationError("User id is required for update")
        self.find_by_id(user.id)
        self._require_unique_email(user)

        updated = self._users.update(user)
        logger.info("updated user id=%s (attachment=%s)", updated.id, updated.upload_file is not None)
        return updated

    def _require_unique_email(self, user: User) -> None:
        other = self._users.get_by_email(user.email)
        if other is not None and other.id != user.id:
            raise ValidationError("Email is already registered")
