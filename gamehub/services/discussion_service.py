"""Business logic for discussion threads and their messages."""
import logging
from typing import Dict, List, Mapping

from ..errors import NotFoundError
from ..policy import require_owner
from ..repositories.thread_repository import MessageRepository, ThreadRepository
from ..utils import now_iso, require_text, sort_by_time, toggle_member

logger = logging.getLogger('gamehub.service.discussion')


class DiscussionService:
    """Manages threads and messages, delegating persistence to
    :class:`~gamehub.repositories.thread_repository.ThreadRepository` and
    :class:`~gamehub.repositories.thread_repository.MessageRepository`.

    A thread's ``message_count`` is a full recount of its messages and
    ``last_activity`` the time of the latest post.  Both are written to the
    threads collection after the message write, as a second step.
    """

    def __init__(self, threads: ThreadRepository, messages: MessageRepository) -> None:
        self._threads = threads
        self._messages = messages

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_message(self, thread_id: int, message_id: int) -> Dict:
        message = self._messages.find(message_id)
        if not message or message.get('thread_id') != thread_id:
            raise NotFoundError('Message not found')
        return message

    def _refresh_thread(self, thread_id: int, bump_activity: bool) -> None:
        thread = self._threads.find(thread_id)
        if not thread:
            return
        thread['message_count'] = self._messages.count_for_thread(thread_id)
        if bump_activity:
            thread['last_activity'] = now_iso()
        self._threads.replace(thread)

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------

    def get_threads(self) -> List[Dict]:
        """All threads, most recently active first."""
        return sort_by_time(self._threads.all(), 'last_activity')

    def get_thread(self, thread_id: int) -> Dict:
        thread = self._threads.find(thread_id)
        if not thread:
            raise NotFoundError('Thread not found')
        return thread

    def create_thread(self, title, content, claims: Mapping) -> Dict:
        require_text(title, 'title')
        created_at = now_iso()
        with self._threads.lock:
            thread = self._threads.insert({
                'title': title,
                'content': content,
                'author': claims['username'],
                'author_role': claims.get('role'),
                'created_at': created_at,
                'last_activity': created_at,
                'message_count': 0,
                'locked': False,
            })
        logger.info('Thread %s created by %s', thread['id'], claims['username'])
        return thread

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def get_messages(self, thread_id: int) -> List[Dict]:
        """Messages of *thread_id*, oldest first."""
        return sort_by_time(self._messages.for_thread(thread_id), 'created_at',
                            newest_first=False)

    def post_message(self, thread_id: int, content, claims: Mapping) -> Dict:
        require_text(content, 'content')
        with self._threads.lock:
            self.get_thread(thread_id)
            message = self._messages.insert({
                'thread_id': thread_id,
                'content': content,
                'author': claims['username'],
                'author_role': claims.get('role'),
                'created_at': now_iso(),
                'likes': [],
            })
            self._refresh_thread(thread_id, bump_activity=True)
        return message

    def toggle_like(self, thread_id: int, message_id: int, claims: Mapping) -> Dict:
        with self._messages.lock:
            message = self._find_message(thread_id, message_id)
            message['likes'] = toggle_member(message.get('likes') or [], claims['username'])
            self._messages.replace(message)
        return message

    def delete_message(self, thread_id: int, message_id: int, claims: Mapping) -> None:
        with self._messages.lock:
            message = self._find_message(thread_id, message_id)
            require_owner(claims, message.get('author'), allow_admin=True,
                          message='Can only delete your own messages')
            self._messages.delete(message_id)
            self._refresh_thread(thread_id, bump_activity=False)
        logger.info('Message %s deleted by %s', message_id, claims['username'])
