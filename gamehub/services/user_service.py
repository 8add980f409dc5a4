"""Business logic for user administration and profile edits."""
import logging
from typing import Dict, List, Mapping

from ..errors import NotFoundError
from ..policy import require_owner, validate_role
from ..repositories.user_repository import UserRepository
from .identity_service import public_user

logger = logging.getLogger('gamehub.service.users')

PROFILE_FIELDS = ('avatar', 'avatarUrl', 'banner', 'bio', 'theme')


class UserService:
    """Admin-facing user management plus owner-only profile edits.

    Deleting a user does not cascade: their comments, ratings, favorites,
    requests and messages stay behind.
    """

    def __init__(self, repository: UserRepository) -> None:
        self._repo = repository

    def get_all(self) -> List[Dict]:
        """Return every user's public fields plus ``created_at``."""
        return [dict(public_user(u), created_at=u.get('created_at'))
                for u in self._repo.all()]

    def update_role(self, user_id: int, role) -> Dict:
        """Change the role of *user_id*.

        Raises:
            ValidationError: *role* is not one of the known roles.
            NotFoundError: no such user.
        """
        role = validate_role(role)
        with self._repo.lock:
            user = self._repo.find(user_id)
            if not user:
                raise NotFoundError('User not found')
            user['role'] = role
            self._repo.replace(user)
        logger.info('Role of user %s set to %s', user_id, role)
        return public_user(user)

    def delete(self, user_id: int) -> None:
        with self._repo.lock:
            if not self._repo.delete(user_id):
                raise NotFoundError('User not found')
        logger.info('Deleted user %s', user_id)

    def update_profile(self, user_id: int, payload: Mapping, claims: Mapping) -> Dict:
        """Update the profile keys present in *payload*; owner only."""
        require_owner(claims, user_id, key='id',
                      message='Can only update your own profile')
        with self._repo.lock:
            user = self._repo.find(user_id)
            if not user:
                raise NotFoundError('User not found')
            for field in PROFILE_FIELDS:
                if field in payload:
                    user[field] = payload[field]
            self._repo.replace(user)
        return public_user(user)
