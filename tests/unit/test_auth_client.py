import json
import base64

import requests

from firestore_fetch.auth.client import IdentityClient
from firestore_fetch.auth.tokens import compute_token_hash, decode_claims, describe_token
from firestore_fetch.config.settings import ClientSettings
from firestore_fetch.exceptions import AuthError
from .base import BaseFetchTest, make_response, TEST_API_KEY, TEST_REFERER


def _unsigned_jwt(claims):
    """Build a JWT-shaped token; signatures are never checked when decoding for logs."""
    def encode(part):
        return base64.urlsafe_b64encode(json.dumps(part).encode()).rstrip(b"=").decode()
    return f"{encode({'alg': 'none', 'typ': 'JWT'})}.{encode(claims)}.sig"


class TestIdentityClient(BaseFetchTest):
    """Test anonymous and password sign-in requests."""

    def setUp(self):
        super().setUp()
        self.client = IdentityClient(self.firebase_config, self.settings, self.session)

    def test_anonymous_sign_in_posts_empty_body_with_referer(self):
        self.session.post.return_value = make_response(200, {"idToken": "anon-token"})

        token = self.client.sign_in_anonymously()

        self.assertEqual(token, "anon-token")
        args, kwargs = self.session.post.call_args
        self.assertEqual(
            args[0],
            f"https://identitytoolkit.googleapis.com/v1/accounts:signUp?key={TEST_API_KEY}",
        )
        self.assertEqual(kwargs["json"], {})
        self.assertEqual(kwargs["headers"]["Referer"], TEST_REFERER)

    def test_anonymous_sign_in_logs_before_attempt(self):
        self.session.post.return_value = make_response(400, {"error": {}}, reason="Bad Request")
        with self.assertLogs("firestore_fetch.auth.client", level="INFO") as logs:
            with self.assertRaises(AuthError):
                self.client.sign_in_anonymously()
        self.assertIn("Signing in anonymously with referer", logs.output[0])

    def test_failure_message_carries_status_text(self):
        self.session.post.return_value = make_response(400, {"error": {}}, reason="Bad Request")
        with self.assertRaises(AuthError) as ctx:
            self.client.sign_in_anonymously()
        self.assertEqual(str(ctx.exception), "Error signing in anonymously: Bad Request")

    def test_password_sign_in_requests_secure_token(self):
        self.session.post.return_value = make_response(200, {"idToken": "user-token"})

        token = self.client.sign_in_with_password("a@b.com", "pw")

        self.assertEqual(token, "user-token")
        args, kwargs = self.session.post.call_args
        self.assertIn("accounts:signInWithPassword", args[0])
        self.assertEqual(kwargs["json"], {"email": "a@b.com", "password": "pw", "returnSecureToken": True})
        self.assertEqual(kwargs["headers"]["Referer"], TEST_REFERER)

    def test_password_failure_raises_auth_error(self):
        self.session.post.return_value = make_response(400, {}, reason="INVALID_PASSWORD")
        with self.assertRaises(AuthError) as ctx:
            self.client.sign_in_with_password("a@b.com", "bad")
        self.assertIn("INVALID_PASSWORD", str(ctx.exception))

    def test_missing_id_token_is_an_error(self):
        self.session.post.return_value = make_response(200, {"kind": "identitytoolkit#SignupNewUserResponse"})
        with self.assertRaises(AuthError):
            self.client.sign_in_anonymously()

    def test_network_failure_is_wrapped(self):
        self.session.post.side_effect = requests.ConnectionError("proxy down")
        with self.assertRaises(AuthError) as ctx:
            self.client.sign_in_anonymously()
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_no_referer_header_when_unset(self):
        client = IdentityClient(self.firebase_config, ClientSettings(), self.session)
        self.session.post.return_value = make_response(200, {"idToken": "t"})
        client.sign_in_anonymously()
        self.assertNotIn("Referer", self.session.post.call_args.kwargs["headers"])


class TestTokens(BaseFetchTest):

    def test_describe_token_reads_firebase_claims(self):
        token = _unsigned_jwt({
            "user_id": "uid-1",
            "iss": "https://securetoken.google.com/test-project",
            "exp": 1700000000,
            "firebase": {"sign_in_provider": "anonymous"},
        })

        info = describe_token(token)

        self.assertEqual(info["user_id"], "uid-1")
        self.assertEqual(info["provider"], "anonymous")
        self.assertEqual(info["hash"], compute_token_hash(token))
        self.assertEqual(len(info["hash"]), 16)

    def test_opaque_token_does_not_fail(self):
        self.assertEqual(decode_claims("not-a-jwt"), {})
        info = describe_token("not-a-jwt")
        self.assertIsNone(info["user_id"])
        self.assertEqual(info["length"], len("not-a-jwt"))
