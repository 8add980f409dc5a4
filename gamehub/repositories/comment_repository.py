"""Repository for per-game comments."""
from typing import Dict, List
from .base import BaseRepository


class CommentRepository(BaseRepository):
    """Persists comments to the ``comments`` collection.

    Schema::

        [
            {
                "id":        <int>,
                "game_id":   <int>,
                "author":    "<username>",
                "role":      "<author role at post time>",
                "text":      "<str>",
                "likes":     ["<username>", ...],
                "timestamp": "<ISO-8601 str>"
            }
        ]
    """

    collection = 'comments'

    def for_game(self, game_id: int) -> List[Dict]:
        return [c for c in self.all() if c.get('game_id') == game_id]

    def delete_for_game(self, game_id: int) -> int:
        """Remove every comment on *game_id*.  Returns how many were removed."""
        records = self.all()
        remaining = [c for c in records if c.get('game_id') != game_id]
        removed = len(records) - len(remaining)
        self.save_all(remaining)
        return removed
