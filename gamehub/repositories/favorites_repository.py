"""Repository for the favorites join table ([{user_id, game_id}, ...])."""
from typing import Dict, List, Set
from .base import BaseRepository


class FavoritesRepository(BaseRepository):
    """Persists favorites to the ``favorites`` collection.

    Schema::

        [
            {"id": <int>, "user_id": <int>, "game_id": <int>,
             "created_at": "<ISO-8601 str>"}
        ]
    """

    collection = 'favorites'

    def game_ids_for(self, user_id: int) -> Set[int]:
        return {f.get('game_id') for f in self.all() if f.get('user_id') == user_id}

    def add(self, user_id: int, game_id: int, created_at: str) -> bool:
        """Append the pair if not already present.  Returns ``True`` if added."""
        records = self.all()
        if any(f.get('user_id') == user_id and f.get('game_id') == game_id
               for f in records):
            return False
        records.append({
            'id': self.next_id(records),
            'user_id': user_id,
            'game_id': game_id,
            'created_at': created_at,
        })
        self.save_all(records)
        return True

    def remove(self, user_id: int, game_id: int) -> bool:
        """Filter the pair out.  Returns ``True`` if it was present."""
        records = self.all()
        remaining: List[Dict] = [
            f for f in records
            if not (f.get('user_id') == user_id and f.get('game_id') == game_id)
        ]
        self.save_all(remaining)
        return len(remaining) != len(records)
