"""Tests for app.services.users (credential store gateway) against in-memory SQLite."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.core.exceptions import (
    DuplicateIdentityError,
    InputValidationError,
    InternalError,
    InvalidCredentialsError,
    StoreUnavailableError,
)
from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.auth import RegisterRequest, UserPublic
from app.services.users import authenticate_user, list_public_users, register_user
from tests._db import make_session_factory


def _candidate(**kwargs: object) -> RegisterRequest:
    data = {"username": "alice", "email": "alice@x.com", "password": "p@ss1234"}
    data.update(kwargs)
    return RegisterRequest.model_validate(data)


class GatewayTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()


class TestRegister(GatewayTestCase):
    """register_user creates partner accounts and enforces unique identities."""

    def test_creates_partner_with_hashed_password(self) -> None:
        user = register_user(self.db, _candidate())
        self.assertEqual(user.role, "partner")
        self.assertTrue(user.id)
        self.assertIsNotNone(user.created_at)
        self.assertNotEqual(user.password_hash, "p@ss1234")
        self.assertTrue(verify_password("p@ss1234", user.password_hash))
        self.assertEqual(self.db.query(User).count(), 1)

    def test_public_summary_built_from_record(self) -> None:
        user = register_user(self.db, _candidate())
        self.assertTrue(UserPublic.model_config.get("from_attributes"))
        summary = UserPublic.model_validate(user)
        self.assertEqual(
            summary.model_dump(),
            {"id": user.id, "username": "alice", "email": "alice@x.com", "role": "partner"},
        )

    def test_caller_supplied_admin_role_is_ignored(self) -> None:
        user = register_user(self.db, _candidate(role="admin"))
        self.assertEqual(user.role, "partner")

    def test_profile_fields_are_stored(self) -> None:
        user = register_user(
            self.db,
            _candidate(
                firstName="Alice",
                lastName="Liddell",
                companyName="Wonder GmbH",
                address1="1 Rabbit Hole",
                city="Oxford",
                zip="OX1",
                country="UK",
                vatId="GB123",
                phone="+44 1865",
            ),
        )
        self.assertEqual(user.first_name, "Alice")
        self.assertEqual(user.company_name, "Wonder GmbH")
        self.assertEqual(user.address, "1 Rabbit Hole")
        self.assertEqual(user.vat_id, "GB123")
        self.assertEqual(user.phone, "+44 1865")

    def test_missing_required_fields(self) -> None:
        for missing in ("username", "email", "password"):
            with self.subTest(missing=missing):
                with self.assertRaises(InputValidationError):
                    register_user(self.db, _candidate(**{missing: None}))
        with self.assertRaises(InputValidationError):
            register_user(self.db, _candidate(username="   "))
        self.assertEqual(self.db.query(User).count(), 0)

    def test_too_long_password_rejected(self) -> None:
        with self.assertRaises(InputValidationError):
            register_user(self.db, _candidate(password="x" * 129))

    def test_profile_fields_bounded_by_column_length(self) -> None:
        cases = {"zip": ("zip", "9" * 33), "vatId": ("vat_id", "V" * 65), "phone": ("phone", "1" * 65)}
        for key, (column, value) in cases.items():
            with self.subTest(field=key):
                self.assertGreater(len(value), User.__table__.c[column].type.length)
                with self.assertRaises(InputValidationError) as ctx:
                    register_user(self.db, _candidate(**{key: value}))
                self.assertIn(key, ctx.exception.message)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_profile_field_at_column_length_is_accepted(self) -> None:
        user = register_user(self.db, _candidate(zip="9" * 32))
        self.assertEqual(user.zip, "9" * 32)

    def test_duplicate_username_leaves_existing_record_unchanged(self) -> None:
        original = register_user(self.db, _candidate())
        original_hash = original.password_hash
        with self.assertRaises(DuplicateIdentityError):
            register_user(self.db, _candidate(email="other@x.com", password="..."))
        self.assertEqual(self.db.query(User).count(), 1)
        stored = self.db.query(User).one()
        self.assertEqual(stored.email, "alice@x.com")
        self.assertEqual(stored.password_hash, original_hash)

    def test_duplicate_email(self) -> None:
        register_user(self.db, _candidate())
        with self.assertRaises(DuplicateIdentityError):
            register_user(self.db, _candidate(username="alice2"))

    def test_username_equal_to_existing_email_is_duplicate(self) -> None:
        register_user(self.db, _candidate())
        with self.assertRaises(DuplicateIdentityError):
            register_user(self.db, _candidate(username="alice@x.com", email="b@x.com"))

    def test_unique_index_decides_when_early_check_misses(self) -> None:
        register_user(self.db, _candidate())
        with patch("app.services.users._find_by_identity", return_value=[]):
            with self.assertRaises(DuplicateIdentityError):
                register_user(self.db, _candidate(email="other@x.com"))
        self.assertEqual(self.db.query(User).count(), 1)

    def test_store_unavailable(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        with self.assertRaises(StoreUnavailableError):
            register_user(db, _candidate())
        db.add.assert_not_called()


class TestAuthenticate(GatewayTestCase):
    """authenticate_user accepts username or email and hides which part was wrong."""

    def setUp(self) -> None:
        super().setUp()
        self.user = register_user(self.db, _candidate())

    def test_by_username(self) -> None:
        self.assertEqual(authenticate_user(self.db, "alice", "p@ss1234").id, self.user.id)

    def test_by_email(self) -> None:
        self.assertEqual(authenticate_user(self.db, "alice@x.com", "p@ss1234").id, self.user.id)

    def test_wrong_password_and_unknown_identifier_are_identical(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong:
            authenticate_user(self.db, "alice@x.com", "wrong")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            authenticate_user(self.db, "nobody@x.com", "p@ss1234")
        self.assertIs(type(wrong.exception), type(unknown.exception))
        self.assertEqual(wrong.exception.message, unknown.exception.message)

    def test_missing_fields(self) -> None:
        with self.assertRaises(InputValidationError):
            authenticate_user(self.db, None, "p@ss1234")
        with self.assertRaises(InputValidationError):
            authenticate_user(self.db, "alice", "")

    def test_does_not_mutate_record(self) -> None:
        before = (self.user.password_hash, self.user.updated_at)
        authenticate_user(self.db, "alice", "p@ss1234")
        self.db.expire_all()
        stored = self.db.get(User, self.user.id)
        self.assertEqual((stored.password_hash, stored.updated_at), before)

    def test_identifier_matching_two_accounts_is_internal_error(self) -> None:
        # Only reachable by editing the store out of band.
        self.db.add(
            User(
                username="bob@x.com",
                email="bob-real@x.com",
                password_hash=hash_password("p"),
            )
        )
        self.db.add(
            User(username="bobby", email="bob@x.com", password_hash=hash_password("p"))
        )
        self.db.commit()
        with self.assertRaises(InternalError):
            authenticate_user(self.db, "bob@x.com", "p")

    def test_store_unavailable_is_not_invalid_credentials(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
        with self.assertRaises(StoreUnavailableError):
            authenticate_user(db, "alice", "p@ss1234")

    def test_pool_timeout_is_store_unavailable(self) -> None:
        db = MagicMock()
        db.query.side_effect = PoolTimeoutError("QueuePool limit reached, connection timed out")
        with self.assertRaises(StoreUnavailableError):
            authenticate_user(db, "alice", "p@ss1234")
        with self.assertRaises(StoreUnavailableError):
            register_user(db, _candidate(username="carol", email="carol@x.com"))


class TestListPublic(GatewayTestCase):
    """list_public_users returns every record without the password hash."""

    def test_lists_all_without_hash(self) -> None:
        register_user(self.db, _candidate())
        register_user(self.db, _candidate(username="bob", email="bob@x.com"))
        items = list_public_users(self.db)
        self.assertEqual(sorted(u.username for u in items), ["alice", "bob"])
        for item in items:
            dumped = item.model_dump(by_alias=True)
            self.assertNotIn("passwordHash", dumped)
            self.assertNotIn("password_hash", dumped)
            self.assertNotIn("password", dumped)
            self.assertEqual(dumped["role"], "partner")

    def test_empty_store(self) -> None:
        self.assertEqual(list_public_users(self.db), [])


if __name__ == "__main__":
    unittest.main()
