"""Repository for user-submitted game requests."""
from typing import Dict, List
from .base import BaseRepository


class RequestRepository(BaseRepository):
    """Persists game requests to the ``requests`` collection.

    Schema::

        [
            {
                "id":        <int>,
                "steam_id":  <str|null>,
                "game_name": "<str>",
                "notes":     <str|null>,
                "username":  "<submitter>",
                "status":    "pending" | "approved" | "rejected",
                "timestamp": "<ISO-8601 str>"
            }
        ]
    """

    collection = 'requests'

    def by_username(self, username: str) -> List[Dict]:
        return [r for r in self.all() if r.get('username') == username]
