"""Business logic for registration, login and session verification."""
import logging
from typing import Dict, Optional, Tuple

from .. import security
from ..errors import ConflictError, UnauthorizedError, ValidationError
from ..policy import ADMIN, BASIC
from ..repositories.user_repository import UserRepository
from ..utils import now_iso

logger = logging.getLogger('gamehub.service.identity')

PUBLIC_USER_FIELDS = ('id', 'username', 'role', 'avatar', 'avatarUrl',
                      'banner', 'bio', 'theme')


def public_user(user: Dict) -> Dict:
    """Return *user* without its password hash."""
    return {field: user.get(field) for field in PUBLIC_USER_FIELDS}


class IdentityService:
    """Registers and authenticates users and issues session tokens,
    delegating persistence to
    :class:`~gamehub.repositories.user_repository.UserRepository`.

    Rules
    -----
    * Usernames are unique; a duplicate registration is a conflict.
    * Login failures use one message whether the username or the password
      was wrong.
    * Session claims (``id``, ``username``, ``role``) are trusted until the
      token expires; they are not re-checked against the stored role.
    """

    INVALID_CREDENTIALS = 'Invalid credentials'

    def __init__(self, repository: UserRepository, secret_key: str,
                 token_ttl_hours: float = 24) -> None:
        self._repo = repository
        self._secret = secret_key
        self._ttl = token_ttl_hours

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _credentials(username, password) -> Tuple[str, str]:
        username = username.strip() if isinstance(username, str) else ''
        if not username or not isinstance(password, str) or not password:
            raise ValidationError('Username and password required')
        return username, password

    def _session(self, user: Dict) -> Dict:
        token = security.issue_token(user, self._secret, self._ttl)
        return {'user': public_user(user), 'token': token}

    def _create(self, username: str, password: str, role: str) -> Dict:
        with self._repo.lock:
            if self._repo.find_by_username(username):
                raise ConflictError('Username already exists')
            user = self._repo.insert({
                'username': username,
                'password': security.hash_password(password),
                'role': role,
                'avatar': None,
                'avatarUrl': None,
                'banner': None,
                'bio': None,
                'theme': 'dark',
                'created_at': now_iso(),
            })
        logger.info('Registered new user: %s (role: %s)', username, role)
        return user

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def register(self, username, password) -> Dict:
        """Create a ``basic`` account and return ``{user, token}``.

        Raises:
            ValidationError: username or password missing.
            ConflictError: username already taken.
        """
        username, password = self._credentials(username, password)
        return self._session(self._create(username, password, BASIC))

    def login(self, username, password) -> Dict:
        """Verify credentials and return ``{user, token}``.

        Raises:
            UnauthorizedError: unknown user or wrong password.
        """
        username, password = self._credentials(username, password)
        user = self._repo.find_by_username(username)
        if not user or not security.verify_password(user.get('password'), password):
            logger.warning('Failed login attempt for username=%s', username)
            raise UnauthorizedError(self.INVALID_CREDENTIALS)
        return self._session(user)

    def verify_session(self, token: Optional[str]) -> Dict:
        """Return the identity claims embedded in *token*."""
        return security.decode_token(token, self._secret)

    def ensure_admin(self, username: Optional[str], password: Optional[str]) -> Optional[Dict]:
        """Create the first admin account when no users exist yet.

        Returns:
            The created user, or ``None`` when users already exist or no
            credentials are configured.
        """
        if not username or not password:
            return None
        with self._repo.lock:
            if self._repo.count() > 0:
                return None
            return self._create(username, password, ADMIN)
