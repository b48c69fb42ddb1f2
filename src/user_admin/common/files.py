"""Helpers for multipart uploads and inline image rendering."""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.constants import IMAGE_DATA_URI_PREFIX


@dataclass(frozen=True)
class MultipartFile:
    """A submitted file read fully into memory.

    Kept on session-scoped forms, so it must not hold on to the request stream.
    """

    file_name: str
    original_file_name: str
    content_type: str
    content: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @classmethod
    def from_storage(cls, storage: Optional[FileStorage]) -> Optional["MultipartFile"]:
        """Return ``None`` when no file was chosen in the file input."""
        if storage is None or not storage.filename:
            return None

        content = storage.read()
        if not content:
            return None

        original = storage.filename
        return cls(
            file_name=secure_filename(original) or "upload",
            original_file_name=original,
            content_type=storage.mimetype or "application/octet-stream",
            content=content,
        )


def to_base64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def to_image_data_uri(content: bytes) -> str:
    return f"{IMAGE_DATA_URI_PREFIX}{to_base64(content)}"
