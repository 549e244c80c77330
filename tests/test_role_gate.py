"""Tests for the role gate: token extraction, 401 vs 403, and pass-through of claims."""

import tempfile
import unittest

from fastapi.security import HTTPAuthorizationCredentials

from movie_catalog.api.v1.auth import get_current_claims, require_roles
from movie_catalog.core.exceptions import ForbiddenError, UnauthorizedError
from movie_catalog.models.user import UserRole
from support import bearer, claims, make_client, make_codec, make_session_factory, reset_overrides


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentClaims(unittest.TestCase):
    def test_missing_credentials_unauthorized(self) -> None:
        with self.assertRaises(UnauthorizedError):
            get_current_claims(None, make_codec())

    def test_invalid_token_unauthorized(self) -> None:
        with self.assertRaises(UnauthorizedError):
            get_current_claims(_credentials("not.a.token"), make_codec())

    def test_valid_token_returns_claims(self) -> None:
        codec = make_codec()
        c = claims("ADMIN")
        self.assertEqual(get_current_claims(_credentials(codec.issue(c)), codec), c)


class TestRequireRoles(unittest.TestCase):
    def test_role_outside_allow_list_forbidden(self) -> None:
        gate = require_roles(UserRole.ADMIN)
        with self.assertRaises(ForbiddenError):
            gate(claims("USER"))

    def test_role_in_allow_list_passes_claims(self) -> None:
        gate = require_roles(UserRole.USER, UserRole.ADMIN)
        for role in ("USER", "ADMIN"):
            c = claims(role)
            self.assertIs(gate(c), c)


class TestRoleGateOverHttp(unittest.TestCase):
    """The gate runs before handlers: rejected requests never reach the store."""

    def setUp(self) -> None:
        self.upload_dir = tempfile.mkdtemp()
        self.client = make_client(make_session_factory(), self.upload_dir)
        codec = make_codec()
        self.user_token = codec.issue(claims("USER", "u-1"))
        self.admin_token = codec.issue(claims("ADMIN", "a-1"))

    def tearDown(self) -> None:
        reset_overrides()

    def test_no_token_is_401_with_challenge(self) -> None:
        resp = self.client.get("/api/movies")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")
        self.assertEqual(resp.json(), {"error": "Not authenticated"})

    def test_bad_token_is_401(self) -> None:
        resp = self.client.get("/api/movies", headers=bearer("garbage"))
        self.assertEqual(resp.status_code, 401)

    def test_wrong_role_is_403(self) -> None:
        resp = self.client.delete("/api/movies/some-id", headers=bearer(self.user_token))
        self.assertEqual(resp.status_code, 403)
        resp = self.client.get("/api/comments/some-movie", headers=bearer(self.admin_token))
        self.assertEqual(resp.status_code, 403)

    def test_allowed_role_reaches_handler(self) -> None:
        resp = self.client.get("/api/movies", headers=bearer(self.user_token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])
        resp = self.client.delete("/api/movies/some-id", headers=bearer(self.admin_token))
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
