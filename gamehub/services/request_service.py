"""Business logic for user-submitted game requests."""
import logging
from typing import Dict, List, Mapping

from ..errors import ConflictError, NotFoundError, ValidationError
from ..policy import ADMIN
from ..repositories.request_repository import RequestRepository
from ..utils import now_iso, require_text, sort_by_time

logger = logging.getLogger('gamehub.service.requests')

PENDING = 'pending'
APPROVED = 'approved'
REJECTED = 'rejected'

# status -> statuses it may move to
TRANSITIONS = {
    PENDING: (APPROVED, REJECTED),
    APPROVED: (),
    REJECTED: (),
}


class RequestService:
    """Manages game requests and their review workflow.

    Rules
    -----
    * New requests start ``pending``.
    * ``pending`` moves to ``approved`` or ``rejected``; both are final.
    * Admins see every request; everybody else sees only their own.
    """

    def __init__(self, repository: RequestRepository) -> None:
        self._repo = repository

    def get_visible(self, claims: Mapping) -> List[Dict]:
        """Return the requests *claims* may see, newest first."""
        if claims.get('role') == ADMIN:
            requests = self._repo.all()
        else:
            requests = self._repo.by_username(claims.get('username'))
        return sort_by_time(requests, 'timestamp')

    def submit(self, steam_id, game_name, notes, claims: Mapping) -> Dict:
        require_text(game_name, 'gameName')
        with self._repo.lock:
            request = self._repo.insert({
                'steam_id': steam_id,
                'game_name': game_name,
                'notes': notes,
                'username': claims['username'],
                'status': PENDING,
                'timestamp': now_iso(),
            })
        logger.info('Request %s (%s) submitted by %s', request['id'], game_name, claims['username'])
        return request

    def set_status(self, request_id: int, status) -> Dict:
        """Resolve a pending request.

        Raises:
            ValidationError: *status* is not ``approved`` or ``rejected``.
            NotFoundError: no such request.
            ConflictError: the request was already resolved.
        """
        if status not in (APPROVED, REJECTED):
            raise ValidationError("status must be 'approved' or 'rejected'")
        with self._repo.lock:
            request = self._repo.find(request_id)
            if not request:
                raise NotFoundError('Request not found')
            current = request.get('status', PENDING)
            if status not in TRANSITIONS.get(current, ()):
                raise ConflictError('Request has already been resolved')
            request['status'] = status
            self._repo.replace(request)
        logger.info('Request %s %s', request_id, status)
        return request

    def delete(self, request_id: int) -> None:
        with self._repo.lock:
            if not self._repo.delete(request_id):
                raise NotFoundError('Request not found')
