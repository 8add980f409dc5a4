"""Password hashing and session-token signing."""
import datetime
from typing import Dict, Mapping

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import ForbiddenError, UnauthorizedError

ALGORITHM = 'HS256'


def hash_password(password: str) -> str:
    """Return a salted hash of *password*."""
    return generate_password_hash(password, method='pbkdf2:sha256')


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def issue_token(user: Mapping, secret: str, ttl_hours: float = 24) -> str:
    """Sign a session token embedding ``id``, ``username`` and ``role``."""
    now = datetime.datetime.now(datetime.timezone.utc)
    claims = {
        'id': user['id'],
        'username': user['username'],
        'role': user['role'],
        'iat': int(now.timestamp()),
        'exp': int((now + datetime.timedelta(hours=ttl_hours)).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> Dict:
    """Return the identity claims of *token*.

    Raises:
        UnauthorizedError: if no token was supplied.
        ForbiddenError: if the token is malformed, tampered with or expired.
    """
    if not token:
        raise UnauthorizedError('Access token required')
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        raise ForbiddenError('Invalid or expired token')
    if 'id' not in payload or 'username' not in payload:
        raise ForbiddenError('Invalid or expired token')
    return {
        'id': payload['id'],
        'username': payload['username'],
        'role': payload.get('role'),
    }


def token_from_header(header_value) -> str:
    """Extract the credential from an ``Authorization: Bearer <token>`` header."""
    if not header_value:
        return ''
    parts = header_value.split(' ', 1)
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return ''
    return parts[1].strip()
