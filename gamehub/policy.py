"""Declarative role-based permission table.

Roles are not a linear hierarchy: ``admin`` may do everything, ``gameadder``
may add games but not delete them or manage users, ``basic`` may take part in
the community features only.
"""
from typing import Dict, FrozenSet, Mapping, Optional

from .errors import ForbiddenError, ValidationError

BASIC = 'basic'
GAMEADDER = 'gameadder'
ADMIN = 'admin'

ROLES = (BASIC, GAMEADDER, ADMIN)

_EVERYONE: FrozenSet[str] = frozenset(ROLES)
_ADMIN_ONLY: FrozenSet[str] = frozenset({ADMIN})

PERMISSIONS: Dict[str, FrozenSet[str]] = {
    'games.add': frozenset({GAMEADDER, ADMIN}),
    'games.delete': _ADMIN_ONLY,

    'comments.add': _EVERYONE,
    'comments.like': _EVERYONE,
    'comments.delete': _EVERYONE,

    'ratings.submit': _EVERYONE,

    'favorites.list': _EVERYONE,
    'favorites.add': _EVERYONE,
    'favorites.remove': _EVERYONE,

    'requests.list': _EVERYONE,
    'requests.submit': _EVERYONE,
    'requests.update': _ADMIN_ONLY,
    'requests.delete': _ADMIN_ONLY,

    'users.list': _ADMIN_ONLY,
    'users.update_role': _ADMIN_ONLY,
    'users.delete': _ADMIN_ONLY,
    'users.update_profile': _EVERYONE,

    'uploads.image': _EVERYONE,

    'threads.create': _EVERYONE,
    'messages.post': _EVERYONE,
    'messages.like': _EVERYONE,
    'messages.delete': _EVERYONE,
}


def is_allowed(role: Optional[str], action: str) -> bool:
    """Return ``True`` if *role* may perform *action*.  Unknown actions are denied."""
    if role == ADMIN:
        return True
    return role in PERMISSIONS.get(action, frozenset())


def authorize(claims: Mapping, action: str) -> None:
    """Raise :class:`ForbiddenError` unless the session's role allows *action*."""
    if not is_allowed(claims.get('role'), action):
        raise ForbiddenError('Insufficient permissions')


def require_owner(claims: Mapping, owner, *, key: str = 'username',
                  allow_admin: bool = False,
                  message: str = 'Insufficient permissions') -> None:
    """Raise :class:`ForbiddenError` unless the caller owns the resource.

    *owner* is compared against ``claims[key]``.  With *allow_admin* an admin
    passes regardless of ownership.
    """
    if allow_admin and claims.get('role') == ADMIN:
        return
    if claims.get(key) != owner:
        raise ForbiddenError(message)


def validate_role(role) -> str:
    if role not in ROLES:
        raise ValidationError(f"Invalid role: {role!r}")
    return role
