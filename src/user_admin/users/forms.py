"""Form objects for the user screens.

Forms are bound from request data, validated into per-field error lists and
kept in the session form store between requests of the same flow.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Mapping, Optional, Tuple

from ..common.files import MultipartFile
from ..common.validators import (
    require_digits,
    require_email,
    require_equal,
    require_max_length,
    require_min_length,
    require_non_empty,
)
from ..core.exceptions import ValidationError

PASSWORD_MIN_LENGTH = 4
NAME_MAX_LENGTH = 40


class _ErrorsMixin:
    errors: Dict[str, List[str]]

    def _check(self, field_name: str, rule: Callable, *args) -> None:
        try:
            rule(getattr(self, field_name), *args)
        except ValidationError as e:
            self.add_error(field_name, str(e))

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)


@dataclass
class UserForm(_ErrorsMixin):
    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""
    tel: str = ""
    zip: str = ""
    address: str = ""
    user_image: Optional[MultipartFile] = None
    rejected_image: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("first_name", "last_name", "email", "tel", "zip", "address")
    SECRET_FIELDS: ClassVar[Tuple[str, ...]] = ("password", "password_confirm")

    def bind(self, data: Mapping[str, str], files: Optional[Mapping] = None) -> "UserForm":
        """Copy submitted values onto the form.

        Fields missing from ``data`` keep their current value. A new file
        replaces ``user_image``; an empty file input keeps the previous choice,
        and so does a non-image file, which is only remembered by name for the
        validation error.
        """
        self.rejected_image = None
        for name in self.TEXT_FIELDS:
            if name in data:
                setattr(self, name, (data.get(name) or "").strip())
        for name in self.SECRET_FIELDS:
            setattr(self, name, data.get(name) or "")

        if files is not None:
            image = MultipartFile.from_storage(files.get("user_image"))
            if image is not None and not image.is_image:
                self.rejected_image = image.original_file_name
            elif image is not None:
                self.user_image = image
        return self

    def validate(self, *, is_new: bool) -> bool:
        self.errors = {}

        self._check("first_name", require_non_empty, "First name")
        self._check("first_name", require_max_length, "First name", NAME_MAX_LENGTH)
        self._check("last_name", require_non_empty, "Last name")
        self._check("last_name", require_max_length, "Last name", NAME_MAX_LENGTH)
        self._check("email", require_non_empty, "Email")
        self._check("email", require_email, "Email")
        self._check("email", require_max_length, "Email", 100)
        self._check("tel", require_digits, "Phone")
        self._check("tel", require_max_length, "Phone", 20)
        self._check("zip", require_digits, "Zip code")
        self._check("zip", require_max_length, "Zip code", 20)
        self._check("address", require_max_length, "Address", 100)

        # On edit a blank password keeps the stored one.
        if is_new or self.password or self.password_confirm:
            self._check("password", require_non_empty, "Password")
            if self.password:
                self._check("password", require_min_length, "Password", PASSWORD_MIN_LENGTH)
            self._check("password_confirm", require_equal, self.password, "Password confirmation")

        if self.rejected_image:
            self.add_error("user_image", f"Only image files can be uploaded: {self.rejected_image}")

        return not self.errors


@dataclass
class SearchUserForm(_ErrorsMixin):
    user_id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    errors: Dict[str, List[str]] = field(default_factory=dict)

    FIELDS: ClassVar[Tuple[str, ...]] = ("user_id", "first_name", "last_name", "email")

    def bind(self, data: Mapping[str, str]) -> "SearchUserForm":
        for name in self.FIELDS:
            if name in data:
                setattr(self, name, (data.get(name) or "").strip())
        return self

    def validate(self) -> bool:
        self.errors = {}
        self._check("user_id", require_digits, "User ID")
        self._check("first_name", require_max_length, "First name", NAME_MAX_LENGTH)
        self._check("last_name", require_max_length, "Last name", NAME_MAX_LENGTH)
        self._check("email", require_max_length, "Email", 100)
        return not self.errors

    def query_args(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.FIELDS if getattr(self, name)}
