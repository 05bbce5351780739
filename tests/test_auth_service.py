import unittest
from datetime import datetime, timedelta, timezone
from unittest import mock

from fitness_api.core.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from fitness_api.core.security_password import PasswordHasher, build_password_context
from fitness_api.core.tokens import TokenService, subject_id
from fitness_api.crud.user import user_crud
from fitness_api.db.base import Base, import_models
from fitness_api.db.session import Database
from fitness_api.services.auth import AuthService
from tests.helpers import PASSWORD, make_settings


class AuthServiceTests(unittest.TestCase):
    def setUp(self):
        self.settings = make_settings()
        self.database = Database(self.settings.DATABASE_URL)
        import_models()
        Base.metadata.create_all(bind=self.database.engine)
        self.db = self.database.session()
        self.addCleanup(self.database.dispose)
        self.addCleanup(self.db.close)
        self.tokens = TokenService(self.settings)
        self.passwords = PasswordHasher(build_password_context(time_cost=1, memory_cost=1024))
        self.auth = AuthService(self.db, self.tokens, self.passwords)

    def _register(self, email="ana@example.com", **kwargs):
        return self.auth.register(email, PASSWORD, "Ana", "Silva", **kwargs)

    def test_register_returns_user_and_pair(self):
        result = self._register()
        user = result["user"]
        self.assertEqual(user.role, "CLIENT")
        self.assertNotEqual(user.hashed_password, PASSWORD)
        self.assertEqual(user.refresh_token, result["refresh_token"])
        claims = self.tokens.decode_access(result["access_token"])
        self.assertEqual(subject_id(claims), user.id)
        self.assertEqual(claims["email"], "ana@example.com")
        self.assertEqual(claims["role"], "CLIENT")

    def test_register_twice_conflicts(self):
        self._register()
        with self.assertRaises(ConflictError):
            self._register()

    def test_register_race_on_unique_email_is_conflict(self):
        self._register()
        # the lookup misses, as it would for a concurrent request
        with mock.patch.object(user_crud, "get_by_email", return_value=None):
            with self.assertRaises(ConflictError):
                self._register()
        self.assertEqual(self.auth.login("ana@example.com", PASSWORD)["user"].email, "ana@example.com")

    def test_register_requires_fields(self):
        with self.assertRaises(ValidationError):
            self.auth.register("bob@example.com", PASSWORD, "  ", "Smith")
        with self.assertRaises(ValidationError):
            self.auth.register("", PASSWORD, "Bob", "Smith")

    def test_register_rejects_unknown_role(self):
        with self.assertRaises(ValidationError):
            self._register(role="OWNER")

    def test_wrong_password_leaves_refresh_token(self):
        first = self._register()
        with self.assertRaises(AuthenticationError) as ctx:
            self.auth.login("ana@example.com", "not-the-password")
        self.assertEqual(ctx.exception.message, "Invalid credentials")
        user = user_crud.get_by_email(self.db, "ana@example.com")
        self.assertEqual(user.refresh_token, first["refresh_token"])

    def test_unknown_email_has_same_message(self):
        with self.assertRaises(AuthenticationError) as ctx:
            self.auth.login("ghost@example.com", PASSWORD)
        self.assertEqual(ctx.exception.message, "Invalid credentials")

    def test_email_match_is_exact(self):
        self._register()
        with self.assertRaises(AuthenticationError):
            self.auth.login("ANA@example.com", PASSWORD)

    def test_superseded_refresh_token_rejected(self):
        old = self._register()["refresh_token"]
        self.auth.login("ana@example.com", PASSWORD)
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(old)

    def test_refresh_rotates(self):
        first = self._register()
        pair = self.auth.refresh(first["refresh_token"])
        self.assertNotEqual(pair["refresh_token"], first["refresh_token"])
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(first["refresh_token"])
        self.auth.refresh(pair["refresh_token"])

    def test_logout_then_refresh_fails(self):
        result = self._register()
        self.auth.logout(result["user"].id)
        self.assertIsNone(user_crud.get(self.db, result["user"].id).refresh_token)
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(result["refresh_token"])

    def test_login_refresh_current_user_round_trip(self):
        user_id = self._register()["user"].id
        login = self.auth.login("ana@example.com", PASSWORD)
        pair = self.auth.refresh(login["refresh_token"])
        claims = self.tokens.decode_access(pair["access_token"])
        self.assertEqual(self.auth.get_current_user(claims).id, user_id)

    def test_access_token_is_not_a_refresh_token(self):
        result = self._register()
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(result["access_token"])

    def test_expired_refresh_token_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(days=30)
        stale_tokens = TokenService(self.settings, clock=lambda: past)
        stale_auth = AuthService(self.db, stale_tokens, self.passwords)
        result = stale_auth.register("old@example.com", PASSWORD, "Old", "Timer")
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(result["refresh_token"])

    def test_refresh_for_deleted_user_fails(self):
        result = self._register()
        user_crud.remove(self.db, result["user"].id)
        with self.assertRaises(AuthenticationError):
            self.auth.refresh(result["refresh_token"])

    def test_current_user_missing_record(self):
        result = self._register()
        claims = self.tokens.decode_access(result["access_token"])
        user_crud.remove(self.db, result["user"].id)
        with self.assertRaises(NotFoundError):
            self.auth.get_current_user(claims)

    def test_outdated_hash_is_upgraded_on_login(self):
        weak = PasswordHasher(build_password_context(time_cost=1, memory_cost=512))
        AuthService(self.db, self.tokens, weak).register("up@example.com", PASSWORD, "Up", "Grade")
        before = user_crud.get_by_email(self.db, "up@example.com").hashed_password
        self.auth.login("up@example.com", PASSWORD)
        after = user_crud.get_by_email(self.db, "up@example.com").hashed_password
        self.assertNotEqual(before, after)
        self.auth.login("up@example.com", PASSWORD)


class TokenSecretTests(unittest.TestCase):
    def test_missing_secret(self):
        with self.assertRaises(ConfigurationError):
            TokenService(make_settings(SECRET_KEY=""))
        with self.assertRaises(ConfigurationError):
            TokenService(make_settings(REFRESH_SECRET_KEY=""))

    def test_equal_secrets(self):
        with self.assertRaises(ConfigurationError):
            TokenService(make_settings(SECRET_KEY="same", REFRESH_SECRET_KEY="same"))

    def test_secrets_are_not_interchangeable(self):
        tokens = TokenService(make_settings())
        access = tokens.create_access_token(user_id=1, email="a@b.co", role="CLIENT")
        refresh = tokens.create_refresh_token(user_id=1)
        self.assertIsNone(tokens.decode_refresh(access))
        self.assertIsNone(tokens.decode_access(refresh))
        self.assertIsNone(tokens.decode_access("garbage"))


if __name__ == "__main__":
    unittest.main()
