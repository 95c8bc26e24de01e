"""Tests for the read-only MongoDB team and invitation repositories."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import PyMongoError

from adapter.mongodb.connection import INVITATIONS_COLLECTION_NAME, TEAMS_COLLECTION_NAME
from adapter.mongodb.invitation_repository import MongoInvitationRepository
from adapter.mongodb.team_repository import MongoTeamRepository
from port.account_repository import StorageError


def _db_with(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


class TestMongoTeamRepository(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.db = _db_with(self.collection)
        self.repo = MongoTeamRepository(self.db)

    def test_get_by_id_maps_team(self):
        self.collection.find_one.return_value = {
            '_id': 't1', 'name': 'Async', 'slug': 'async', 'member_ids': ['u1', 'u2'],
        }

        team = self.repo.get_by_id('t1')

        self.db.__getitem__.assert_called_with(TEAMS_COLLECTION_NAME)
        self.assertEqual(team.slug, 'async')
        self.assertTrue(team.has_member('u2'))
        self.assertFalse(team.has_member('u3'))

    def test_missing_member_ids_is_empty(self):
        self.collection.find_one.return_value = {'_id': 't1'}

        self.assertEqual(self.repo.get_by_id('t1').member_ids, [])

    def test_get_by_id_not_found(self):
        self.collection.find_one.return_value = None
        self.assertIsNone(self.repo.get_by_id('t1'))

    def test_read_failure_raises_storage_error(self):
        self.collection.find_one.side_effect = PyMongoError('down')
        with self.assertRaises(StorageError):
            self.repo.get_by_id('t1')


class TestMongoInvitationRepository(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.db = _db_with(self.collection)
        self.repo = MongoInvitationRepository(self.db)

    def test_count_pending_by_email(self):
        self.collection.count_documents.return_value = 2

        self.assertEqual(self.repo.count_pending('a@x.com'), 2)
        self.db.__getitem__.assert_called_with(INVITATIONS_COLLECTION_NAME)
        self.collection.count_documents.assert_called_once_with({'email': 'a@x.com'})

    def test_count_failure_raises_storage_error(self):
        self.collection.count_documents.side_effect = PyMongoError('down')
        with self.assertRaises(StorageError):
            self.repo.count_pending('a@x.com')

    def test_ensure_indexes(self):
        self.assertTrue(self.repo.ensure_indexes())
        self.collection.create_index.assert_called_once_with(
            [('email', 1)], name='idx_invitations_email',
        )


if __name__ == '__main__':
    unittest.main()
