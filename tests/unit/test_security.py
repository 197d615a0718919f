from datetime import timedelta
from jose import jwt
from category_api.auth.jwt_handler import decode_access_token
from category_api.core.config import settings
from category_api.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = get_password_hash("Password123")

        assert hashed != "Password123"
        assert verify_password("Password123", hashed)

    def test_wrong_password_is_rejected(self):
        hashed = get_password_hash("Password123")

        assert not verify_password("Password124", hashed)

    def test_malformed_hash_is_rejected(self):
        assert not verify_password("Password123", "not-a-bcrypt-hash")


class TestAccessToken:

    def test_token_carries_subject(self):
        token = create_access_token({"sub": "42", "email": "user@example.com"})

        token_data = decode_access_token(token)

        assert token_data is not None
        assert token_data.sub == "42"
        assert token_data.email == "user@example.com"
        assert token_data.type == "access"

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "42"}, expires_delta=timedelta(seconds=-1))

        assert verify_token(token) is None
        assert decode_access_token(token) is None

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode({"sub": "42", "type": "access"}, "another-key", algorithm=settings.ALGORITHM)

        assert decode_access_token(token) is None

    def test_non_access_token_is_rejected(self):
        token = jwt.encode(
            {"sub": "42", "type": "refresh", "exp": 4102444800},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_token_without_subject_is_rejected(self):
        token = create_access_token({"email": "user@example.com"})

        assert decode_access_token(token) is None
