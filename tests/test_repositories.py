#!/usr/bin/env python3
"""
Unit tests for the storage backends and gamehub/repositories.

Run with:
    python -m pytest tests/test_repositories.py
"""
import json
import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gamehub.repositories import (
    BaseRepository, JsonFileStore, MemoryStore, UserRepository, GameRepository,
    CommentRepository, RatingRepository, FavoritesRepository,
    RequestRepository, MessageRepository,
)


class TmpDirMixin(unittest.TestCase):
    """Creates a fresh temp directory for each test."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.tmp, name)


# ===========================================================================
# Stores
# ===========================================================================

class TestJsonFileStore(TmpDirMixin):

    def test_missing_collection_is_empty(self):
        self.assertEqual(JsonFileStore(self.tmp).load('games'), [])

    def test_save_and_load(self):
        store = JsonFileStore(self.tmp)
        store.save('games', [{'id': 1, 'title': 'Portal 2'}])
        self.assertEqual(store.load('games'), [{'id': 1, 'title': 'Portal 2'}])

    def test_one_file_per_collection(self):
        store = JsonFileStore(self.tmp)
        store.save('thread_messages', [{'id': 1}])
        with open(self._path('thread_messages.json')) as f:
            self.assertEqual(json.load(f), [{'id': 1}])

    def test_persisted_across_instances(self):
        JsonFileStore(self.tmp).save('users', [{'id': 7}])
        self.assertEqual(JsonFileStore(self.tmp).load('users'), [{'id': 7}])

    def test_corrupt_file_returns_empty(self):
        with open(self._path('comments.json'), 'w') as f:
            f.write('NOT JSON')
        self.assertEqual(JsonFileStore(self.tmp).load('comments'), [])

    def test_non_list_json_returns_empty(self):
        with open(self._path('comments.json'), 'w') as f:
            json.dump({'id': 1}, f)
        self.assertEqual(JsonFileStore(self.tmp).load('comments'), [])

    def test_no_temp_files_left_behind(self):
        store = JsonFileStore(self.tmp)
        store.save('games', [{'id': 1}])
        store.save('games', [{'id': 2}])
        self.assertEqual(os.listdir(self.tmp), ['games.json'])

    def test_creates_data_dir(self):
        nested = self._path('a/b')
        JsonFileStore(nested)
        self.assertTrue(os.path.isdir(nested))


class TestMemoryStore(unittest.TestCase):

    def test_initial_data(self):
        store = MemoryStore({'games': [{'id': 1}]})
        self.assertEqual(store.load('games'), [{'id': 1}])

    def test_load_returns_copies(self):
        store = MemoryStore({'games': [{'id': 1}]})
        store.load('games')[0]['id'] = 99
        self.assertEqual(store.load('games'), [{'id': 1}])

    def test_save_stores_copies(self):
        store = MemoryStore()
        records = [{'id': 1}]
        store.save('games', records)
        records.append({'id': 2})
        self.assertEqual(len(store.load('games')), 1)


# ===========================================================================
# Base repository
# ===========================================================================

class TestBaseRepository(unittest.TestCase):

    def _make(self, records=None):
        return GameRepository(MemoryStore({'games': records or []}))

    def test_next_id_empty(self):
        self.assertEqual(BaseRepository.next_id([]), 1)

    def test_next_id_is_max_plus_one(self):
        self.assertEqual(BaseRepository.next_id([{'id': 3}, {'id': 9}, {'id': 4}]), 10)

    def test_next_id_ignores_missing_ids(self):
        self.assertEqual(BaseRepository.next_id([{'title': 'x'}, {'id': None}, {'id': 2}]), 3)

    def test_next_id_reuses_after_deleting_max(self):
        repo = self._make([{'id': 1}, {'id': 2}])
        repo.delete(2)
        self.assertEqual(repo.insert({'title': 'new'})['id'], 2)

    def test_insert_assigns_ids(self):
        repo = self._make()
        self.assertEqual(repo.insert({'title': 'a'})['id'], 1)
        self.assertEqual(repo.insert({'title': 'b'})['id'], 2)
        self.assertEqual(repo.count(), 2)

    def test_find(self):
        repo = self._make([{'id': 5, 'title': 'Skyrim'}])
        self.assertEqual(repo.find(5)['title'], 'Skyrim')
        self.assertIsNone(repo.find(6))

    def test_replace(self):
        repo = self._make([{'id': 5, 'title': 'Skyrim'}])
        self.assertTrue(repo.replace({'id': 5, 'title': 'Oblivion'}))
        self.assertEqual(repo.find(5)['title'], 'Oblivion')

    def test_replace_missing_returns_false(self):
        self.assertFalse(self._make().replace({'id': 1}))

    def test_delete(self):
        repo = self._make([{'id': 1}, {'id': 2}])
        self.assertTrue(repo.delete(1))
        self.assertEqual(repo.all(), [{'id': 2}])

    def test_delete_missing_returns_false(self):
        self.assertFalse(self._make([{'id': 1}]).delete(2))


# ===========================================================================
# Concrete repositories
# ===========================================================================

class TestUserRepository(unittest.TestCase):

    def test_find_by_username(self):
        repo = UserRepository(MemoryStore({'users': [
            {'id': 1, 'username': 'alice'}, {'id': 2, 'username': 'bob'}]}))
        self.assertEqual(repo.find_by_username('bob')['id'], 2)
        self.assertIsNone(repo.find_by_username('carol'))

    def test_usernames_by_id(self):
        repo = UserRepository(MemoryStore({'users': [{'id': 1, 'username': 'alice'}]}))
        self.assertEqual(repo.usernames_by_id(), {1: 'alice'})


class TestCommentRepository(unittest.TestCase):

    def test_delete_for_game_only_touches_that_game(self):
        repo = CommentRepository(MemoryStore({'comments': [
            {'id': 1, 'game_id': 1}, {'id': 2, 'game_id': 2}, {'id': 3, 'game_id': 1}]}))
        self.assertEqual(repo.delete_for_game(1), 2)
        self.assertEqual(repo.all(), [{'id': 2, 'game_id': 2}])


class TestRatingRepository(unittest.TestCase):

    def test_upsert_inserts_then_replaces(self):
        repo = RatingRepository(MemoryStore())
        first = repo.upsert(1, 10, {'rating': 5, 'review': 'ok'})
        second = repo.upsert(1, 10, {'rating': 9, 'review': 'great'})
        self.assertEqual(first['id'], second['id'])
        self.assertEqual(len(repo.all()), 1)
        self.assertEqual(repo.for_game(10)[0]['rating'], 9)

    def test_different_users_get_separate_rows(self):
        repo = RatingRepository(MemoryStore())
        repo.upsert(1, 10, {'rating': 5})
        repo.upsert(2, 10, {'rating': 6})
        self.assertEqual(len(repo.for_game(10)), 2)


class TestFavoritesRepository(unittest.TestCase):

    def test_add_is_idempotent(self):
        repo = FavoritesRepository(MemoryStore())
        self.assertTrue(repo.add(1, 5, '2024-01-01T00:00:00.000Z'))
        self.assertFalse(repo.add(1, 5, '2024-01-02T00:00:00.000Z'))
        self.assertEqual(len(repo.all()), 1)

    def test_remove(self):
        repo = FavoritesRepository(MemoryStore())
        repo.add(1, 5, 't')
        repo.add(2, 5, 't')
        self.assertTrue(repo.remove(1, 5))
        self.assertFalse(repo.remove(1, 5))
        self.assertEqual(repo.game_ids_for(2), {5})
        self.assertEqual(repo.game_ids_for(1), set())


class TestRequestRepository(unittest.TestCase):

    def test_by_username(self):
        repo = RequestRepository(MemoryStore({'requests': [
            {'id': 1, 'username': 'alice'}, {'id': 2, 'username': 'bob'}]}))
        self.assertEqual([r['id'] for r in repo.by_username('alice')], [1])


class TestMessageRepository(unittest.TestCase):

    def test_count_for_thread(self):
        repo = MessageRepository(MemoryStore({'thread_messages': [
            {'id': 1, 'thread_id': 1}, {'id': 2, 'thread_id': 1}, {'id': 3, 'thread_id': 2}]}))
        self.assertEqual(repo.count_for_thread(1), 2)
        self.assertEqual(repo.count_for_thread(3), 0)


if __name__ == '__main__':
    unittest.main()
