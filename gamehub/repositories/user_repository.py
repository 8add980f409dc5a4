"""Repository for registered accounts."""
from typing import Dict, Optional
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Persists user accounts to the ``users`` collection.

    Schema::

        [
            {
                "id":         <int>,
                "username":   "<str, unique>",
                "password":   "<salted hash>",
                "role":       "basic" | "gameadder" | "admin",
                "avatar":     <str|null>,
                "avatarUrl":  <str|null>,
                "banner":     <str|null>,
                "bio":        <str|null>,
                "theme":      "<str>",
                "created_at": "<ISO-8601 str>"
            }
        ]
    """

    collection = 'users'

    def find_by_username(self, username: str) -> Optional[Dict]:
        for user in self.all():
            if user.get('username') == username:
                return user
        return None

    def usernames_by_id(self) -> Dict[int, str]:
        return {u.get('id'): u.get('username') for u in self.all()}
