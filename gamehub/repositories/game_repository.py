"""Repository for the game catalog."""
from .base import BaseRepository


class GameRepository(BaseRepository):
    """Persists catalog entries to the ``games`` collection.

    Schema::

        [
            {
                "id": <int>, "title": "<str>", "developer": ..., "publisher": ...,
                "release_date": ..., "short_description": ...,
                "full_description": ..., "genre": ..., "tags": ...,
                "rating": ..., "difficulty": ..., "image": ...,
                "download_link": ..., "file_size": ..., "requirements": ...,
                "notes": ..., "added_by": "<username>",
                "timestamp": "<ISO-8601 str>"
            }
        ]
    """

    collection = 'games'
