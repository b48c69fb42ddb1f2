"""Reducers for ``StaffPermissionDao.select_by_staff_id``."""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List

from .model import Permission


def to_permission_keys(rows: Iterable[Permission]) -> FrozenSet[str]:
    return frozenset(p.permission_key for p in rows)


def group_by_role(rows: Iterable[Permission]) -> Dict[str, List[str]]:
    grants: Dict[str, List[str]] = {}
    for p in rows:
        keys = grants.setdefault(p.role_key, [])
        if p.permission_key not in keys:
            keys.append(p.permission_key)
    return {role: sorted(keys) for role, keys in grants.items()}


def count_permissions(rows: Iterable[Permission]) -> int:
    return sum(1 for _ in rows)
