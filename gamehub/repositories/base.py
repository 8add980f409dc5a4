"""Storage backends and the repository base class used by all collections."""
import copy
import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict, List, Optional


class JsonFileStore:
    """Stores each collection as ``<data_dir>/<collection>.json``.

    Every :meth:`load` re-reads the file and every :meth:`save` rewrites it
    whole.  Writes use a write-then-rename strategy so the file is never left
    in a partially-written state.
    """

    def __init__(self, data_dir: str) -> None:
        self.data_dir = data_dir
        self.lock = threading.RLock()
        self._log = logging.getLogger('gamehub.repository.JsonFileStore')
        os.makedirs(data_dir, exist_ok=True)

    def path_for(self, collection: str) -> str:
        return os.path.join(self.data_dir, f'{collection}.json')

    def load(self, collection: str) -> List[Dict]:
        """Return the records of *collection*, or ``[]`` on missing/corrupt file."""
        path = self.path_for(collection)
        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as fh:
                    data = json.load(fh)
                if isinstance(data, list):
                    return data
                self._log.warning("Ignoring %s: expected a JSON array", path)
            except (json.JSONDecodeError, IOError) as exc:
                self._log.warning("Could not load %s: %s", path, exc)
        return []

    def save(self, collection: str, records: List[Dict]) -> None:
        """Atomically write *records* as JSON to the collection file."""
        path = self.path_for(collection)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(records, fh, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


class MemoryStore:
    """In-process store with the same contract as :class:`JsonFileStore`."""

    def __init__(self, initial: Optional[Dict[str, List[Dict]]] = None) -> None:
        self.lock = threading.RLock()
        self._collections: Dict[str, List[Dict]] = copy.deepcopy(initial or {})

    def load(self, collection: str) -> List[Dict]:
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: List[Dict]) -> None:
        self._collections[collection] = copy.deepcopy(records)


class BaseRepository:
    """Provides read/write access to one named collection of a store.

    Sub-classes set :attr:`collection` and add domain-specific queries.
    Nothing is cached: :meth:`all` re-reads the store on every call, callers
    mutate the returned list and hand it back to :meth:`save_all`.
    """

    collection: str = ''

    def __init__(self, store: Any) -> None:
        self._store = store
        self._log = logging.getLogger(f'gamehub.repository.{type(self).__name__}')

    @property
    def lock(self):
        return self._store.lock

    def all(self) -> List[Dict]:
        return self._store.load(self.collection)

    def save_all(self, records: List[Dict]) -> None:
        self._store.save(self.collection, records)
        self._log.debug("Saved %d %s", len(records), self.collection)

    def count(self) -> int:
        return len(self.all())

    @staticmethod
    def next_id(records: List[Dict]) -> int:
        """Return ``max(existing ids) + 1``; records without an int id count as 0."""
        ids = [r.get('id') for r in records]
        return max([0] + [i for i in ids if isinstance(i, int)]) + 1

    @staticmethod
    def find_in(records: List[Dict], record_id: int) -> Optional[Dict]:
        for record in records:
            if record.get('id') == record_id:
                return record
        return None

    def find(self, record_id: int) -> Optional[Dict]:
        """Return the record with *record_id*, or ``None``."""
        return self.find_in(self.all(), record_id)

    def insert(self, record: Dict) -> Dict:
        """Assign the next id to *record*, append it and persist."""
        records = self.all()
        record['id'] = self.next_id(records)
        records.append(record)
        self.save_all(records)
        return record

    def replace(self, record: Dict) -> bool:
        """Overwrite the stored record with the same id.  Returns ``False`` if absent."""
        records = self.all()
        for index, existing in enumerate(records):
            if existing.get('id') == record.get('id'):
                records[index] = record
                self.save_all(records)
                return True
        return False

    def delete(self, record_id: int) -> bool:
        """Remove the record with *record_id*.  Returns ``True`` if it existed."""
        records = self.all()
        remaining = [r for r in records if r.get('id') != record_id]
        if len(remaining) == len(records):
            return False
        self.save_all(remaining)
        return True
