"""Field-by-field conversions between forms, domain objects and CSV rows."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

from ..common.files import MultipartFile
from ..core.ids import ID
from .forms import SearchUserForm, UserForm
from .model import UploadFile, User, UserCriteria

USER_CSV_FIELDS = ("user_id", "first_name", "last_name", "email", "tel", "zip", "address")


def _blank_to_none(value: str) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def form_to_user(form: UserForm, base: Optional[User] = None) -> User:
    """Map form fields onto ``base`` (or a new User).

    The password is never copied: callers store a hash, not the form's plaintext.
    """
    fields = dict(
        first_name=form.first_name,
        last_name=form.last_name,
        email=form.email,
        tel=_blank_to_none(form.tel),
        zip=_blank_to_none(form.zip),
        address=_blank_to_none(form.address),
    )
    if base is None:
        return User(id=None, password="", **fields)
    return replace(base, **fields)


def user_to_form(user: User) -> UserForm:
    return UserForm(
        id=user.id.value if user.id else None,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        tel=user.tel or "",
        zip=user.zip or "",
        address=user.address or "",
    )


def apply_image(existing: Optional[UploadFile], image: MultipartFile) -> UploadFile:
    """Replace the attachment content wholesale, keeping the row id when there is one."""
    return UploadFile(
        upload_file_id=existing.upload_file_id if existing else None,
        file_name=image.file_name,
        original_file_name=image.original_file_name,
        content_type=image.content_type,
        content=image.content,
    )


def search_form_to_criteria(form: SearchUserForm) -> UserCriteria:
    user_id = form.user_id.strip()
    return UserCriteria(
        user_id=ID.of(user_id) if user_id.isdigit() else None,
        first_name=_blank_to_none(form.first_name),
        last_name=_blank_to_none(form.last_name),
        email=_blank_to_none(form.email),
    )


def user_to_csv_row(user: User) -> Dict[str, object]:
    return {
        "user_id": user.id.value if user.id else "",
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "tel": user.tel or "",
        "zip": user.zip or "",
        "address": user.address or "",
    }
