from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ID(Generic[T]):
    """Typed identifier.

    ``ID[User]`` and ``ID[Staff]`` wrap the same raw integer type but are
    distinct to a type checker, so a staff id cannot be handed to a user lookup.
    """

    value: int

    @classmethod
    def of(cls, value: Union[int, str]) -> "ID[T]":
        return cls(int(value))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
