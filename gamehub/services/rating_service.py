"""Business logic for game ratings and reviews."""
from typing import Dict, List, Mapping

from ..errors import ValidationError
from ..repositories.rating_repository import RatingRepository
from ..repositories.user_repository import UserRepository
from ..utils import now_iso, to_int


class RatingService:
    """Validates and applies ratings, delegating persistence to
    :class:`~gamehub.repositories.rating_repository.RatingRepository`.

    Rules
    -----
    * ``rating`` must be an integer in the range **1–10** (inclusive).
    * ``review`` is free-text and optional.
    * A second submission for the same (user, game) pair replaces the first
      in place (upsert semantics, same id).
    """

    def __init__(self, ratings: RatingRepository, users: UserRepository) -> None:
        self._repo = ratings
        self._users = users

    def get_for_game(self, game_id: int) -> List[Dict]:
        """Return the game's ratings, each with the rater's ``username``."""
        names = self._users.usernames_by_id()
        return [dict(r, username=names.get(r.get('user_id')) or 'Unknown')
                for r in self._repo.for_game(game_id)]

    def upsert(self, game_id: int, rating, review, claims: Mapping) -> Dict:
        score = to_int(rating, 'rating')
        if not 1 <= score <= 10:
            raise ValidationError('rating must be between 1 and 10')
        with self._repo.lock:
            return self._repo.upsert(claims['id'], game_id, {
                'rating': score,
                'review': review,
                'created_at': now_iso(),
            })
