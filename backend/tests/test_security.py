"""
Storefront Backend — Security Helper Tests
============================================

What:  Password hashing and JWT helpers in storefront.security.
"""

import pytest

from storefront.exceptions import UnauthorizedError, ValidationError
from storefront.security import (
    ADMIN_DOMAIN,
    STORE_DOMAIN,
    create_access_token,
    decode_access_token,
    hash_password,
    read_unverified_claims,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret")

        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("S3cret", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_missing_or_malformed_hash(self):
        assert not verify_password("anything", None)
        assert not verify_password("anything", "not-a-bcrypt-hash")

    def test_password_over_72_bytes(self):
        hash_password("a" * 72)

        with pytest.raises(ValidationError, match="at most 72 bytes"):
            hash_password("a" * 73)
        assert not verify_password("a" * 100, hash_password("a" * 72))


class TestTokens:
    def test_round_trip_claims(self):
        token = create_access_token(
            subject="usr_1", domain=ADMIN_DOMAIN, extra_claims={"email": "a@b.co"}
        )

        claims = decode_access_token(token, domain=ADMIN_DOMAIN)

        assert claims["sub"] == "usr_1"
        assert claims["domain"] == "admin"
        assert claims["email"] == "a@b.co"

    def test_domain_mismatch_rejected(self):
        token = create_access_token(subject="cus_1", domain=STORE_DOMAIN)

        with pytest.raises(UnauthorizedError, match="Invalid token"):
            decode_access_token(token, domain=ADMIN_DOMAIN)

    def test_expired_token(self):
        token = create_access_token(subject="usr_1", domain=ADMIN_DOMAIN, expires_in=-10)

        with pytest.raises(UnauthorizedError, match="expired"):
            decode_access_token(token)

    def test_wrong_secret(self):
        token = create_access_token(
            subject="usr_1", domain=ADMIN_DOMAIN, secret="another-secret-of-sufficient-length"
        )

        with pytest.raises(UnauthorizedError):
            decode_access_token(token)

    def test_read_unverified_claims(self):
        token = create_access_token(
            subject="usr_1", domain=ADMIN_DOMAIN, secret="another-secret-of-sufficient-length"
        )
        assert read_unverified_claims(token)["sub"] == "usr_1"

    def test_read_unverified_claims_garbage(self):
        with pytest.raises(UnauthorizedError):
            read_unverified_claims("garbage")
