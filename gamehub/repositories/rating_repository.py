"""Repository for user ratings ({user_id, game_id} unique)."""
from typing import Dict, List
from .base import BaseRepository


class RatingRepository(BaseRepository):
    """Persists ratings to the ``ratings`` collection.

    Schema::

        [
            {
                "id":         <int>,
                "user_id":    <int>,
                "game_id":    <int>,
                "rating":     <int 1-10>,
                "review":     <str|null>,
                "created_at": "<ISO-8601 str>"
            }
        ]
    """

    collection = 'ratings'

    def for_game(self, game_id: int) -> List[Dict]:
        return [r for r in self.all() if r.get('game_id') == game_id]

    def upsert(self, user_id: int, game_id: int, fields: Dict) -> Dict:
        """Insert or replace the rating of *user_id* for *game_id*, then persist.

        A replaced rating keeps its id.
        """
        records = self.all()
        for index, existing in enumerate(records):
            if existing.get('user_id') == user_id and existing.get('game_id') == game_id:
                rating = dict(fields, id=existing['id'], user_id=user_id, game_id=game_id)
                records[index] = rating
                break
        else:
            rating = dict(fields, id=self.next_id(records), user_id=user_id, game_id=game_id)
            records.append(rating)
        self.save_all(records)
        return rating
