from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.ids import ID


@dataclass(frozen=True)
class UploadFile:
    """Binary attachment owned by exactly one User."""

    upload_file_id: Optional[ID["UploadFile"]]
    file_name: str
    original_file_name: str
    content_type: str
    content: bytes


@dataclass(frozen=True)
class User:
    """Domain entity: a managed user.

    ``password`` only ever holds a werkzeug password hash.
    """

    id: Optional[ID["User"]]
    first_name: str
    last_name: str
    email: str
    password: str
    tel: Optional[str] = None
    zip: Optional[str] = None
    address: Optional[str] = None
    upload_file: Optional[UploadFile] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class UserCriteria:
    """Search filter; ``None`` fields are not applied."""

    user_id: Optional[ID[User]] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
