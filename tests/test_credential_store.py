"""Credential store against in-memory SQLite, including the registration race."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import IntegrityError

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.core.errors import ConflictError, InvalidArgumentError
from app.models import Base, User
from app.services.auth import AuthService
from app.services.credential_store import (
    CredentialStore,
    DuplicateEmailError,
    _is_email_conflict,
)


class StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()
        self.store = CredentialStore(self.db)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)


class TestInsertAndFind(StoreTestCase):
    def test_insert_assigns_id_and_default_profile(self) -> None:
        user = self.store.insert("ann", "ann@example.com", "hash")
        self.assertTrue(user.id)
        self.assertEqual(user.role, "user")
        self.assertEqual(user.profile, {})
        found = self.store.find_by_email("ann@example.com")
        self.assertEqual(found.id, user.id)

    def test_lookup_is_exact_match(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        self.assertIsNone(self.store.find_by_email("ANN@example.com"))
        self.assertIsNone(self.store.find_by_email("nobody@example.com"))

    def test_unique_index_rejects_second_insert(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        with self.assertRaises(DuplicateEmailError):
            self.store.insert("ann2", "ann@example.com", "hash2")
        self.assertEqual(self.db.query(User).count(), 1)


class TestConcurrentRegistration(StoreTestCase):
    """
    Two registrations for one email can both pass the existence check.
    The unique index on users.email lets only one insert through; the other
    surfaces as ConflictError, so the store never holds duplicates.
    """

    def test_both_pass_lookup_only_one_persists(self) -> None:
        service = AuthService(self.store, get_settings())
        with patch.object(CredentialStore, "find_by_email", return_value=None):
            service.register("first", "race@example.com", "pw-1")
            with self.assertRaises(ConflictError):
                service.register("second", "race@example.com", "pw-2")
        rows = self.db.query(User).filter(User.email == "race@example.com").all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].username, "first")


class TestUpdateByEmail(StoreTestCase):
    def test_no_match(self) -> None:
        result = self.store.update_by_email("nobody@example.com", {"username": "x"})
        self.assertFalse(result.matched)
        self.assertFalse(result.modified)

    def test_columns_set_and_extra_fields_merged_into_profile(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        result = self.store.update_by_email(
            "ann@example.com", {"username": "Ann B.", "photoURL": "http://x/y.png"}
        )
        self.assertTrue(result.matched)
        self.assertTrue(result.modified)
        self.db.expire_all()
        user = self.store.find_by_email("ann@example.com")
        self.assertEqual(user.username, "Ann B.")
        self.assertEqual(user.profile, {"photoURL": "http://x/y.png"})

        again = self.store.update_by_email("ann@example.com", {"photoURL": "http://x/z.png"})
        self.assertTrue(again.modified)
        self.db.expire_all()
        self.assertEqual(
            self.store.find_by_email("ann@example.com").profile,
            {"photoURL": "http://x/z.png"},
        )

    def test_identical_values_are_not_a_modification(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        result = self.store.update_by_email("ann@example.com", {"username": "ann"})
        self.assertTrue(result.matched)
        self.assertFalse(result.modified)
        self.assertEqual(result.as_counts(), {"matchedCount": 1, "modifiedCount": 0})

    def test_id_is_immutable(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        with self.assertRaises(InvalidArgumentError):
            self.store.update_by_email("ann@example.com", {"id": "other"})

    def test_changing_email_to_taken_one_raises(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        self.store.insert("bob", "bob@example.com", "hash")
        with self.assertRaises(DuplicateEmailError):
            self.store.update_by_email("ann@example.com", {"email": "bob@example.com"})

    def test_null_or_non_string_column_values_rejected(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        for fields in ({"username": None}, {"email": None}, {"role": 7}, {"username": "  "}):
            with self.subTest(fields=fields):
                with self.assertRaises(InvalidArgumentError):
                    self.store.update_by_email("ann@example.com", fields)
        self.db.expire_all()
        self.assertEqual(self.store.find_by_email("ann@example.com").username, "ann")


class TestIntegrityErrorClassification(StoreTestCase):
    def test_not_null_violation_is_not_reported_as_duplicate(self) -> None:
        with self.assertRaises(IntegrityError) as ctx:
            self.store.insert(None, "ann@example.com", "hash")
        self.assertNotIsInstance(ctx.exception, DuplicateEmailError)
        self.assertFalse(_is_email_conflict(ctx.exception))
        self.assertEqual(self.db.query(User).count(), 0)

    def test_unique_email_violation_is_recognised(self) -> None:
        self.store.insert("ann", "ann@example.com", "hash")
        self.db.add(User(username="x", email="ann@example.com", password_hash="h", profile={}))
        with self.assertRaises(IntegrityError) as ctx:
            self.db.commit()
        self.db.rollback()
        self.assertTrue(_is_email_conflict(ctx.exception))


if __name__ == "__main__":
    unittest.main()
