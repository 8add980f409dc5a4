"""Repositories for discussion threads and their messages."""
from typing import Dict, List
from .base import BaseRepository


class ThreadRepository(BaseRepository):
    """Persists threads to the ``threads`` collection.

    Schema::

        [
            {
                "id":            <int>,
                "title":         "<str>",
                "content":       "<str>",
                "author":        "<username>",
                "author_role":   "<role>",
                "created_at":    "<ISO-8601 str>",
                "last_activity": "<ISO-8601 str>",
                "message_count": <int>,
                "locked":        <bool>
            }
        ]

    ``message_count`` and ``last_activity`` are derived from the
    ``thread_messages`` collection and rewritten after every message change.
    """

    collection = 'threads'


class MessageRepository(BaseRepository):
    """Persists thread messages to the ``thread_messages`` collection.

    Schema::

        [
            {
                "id":          <int>,
                "thread_id":   <int>,
                "content":     "<str>",
                "author":      "<username>",
                "author_role": "<role>",
                "created_at":  "<ISO-8601 str>",
                "likes":       ["<username>", ...]
            }
        ]
    """

    collection = 'thread_messages'

    def for_thread(self, thread_id: int) -> List[Dict]:
        return [m for m in self.all() if m.get('thread_id') == thread_id]

    def count_for_thread(self, thread_id: int) -> int:
        return len(self.for_thread(thread_id))
