import jwt
import pytest

from jwt_pizza.core.config import Settings
from jwt_pizza.core.errors import InvalidToken
from jwt_pizza.core.security import TokenCodec, extract_signature


CLAIMS = {"id": 7, "name": "pizza diner", "email": "d@jwt.com", "roles": [{"role": "diner"}]}


def test_extract_signature_returns_third_segment():
    assert extract_signature("a.b.c") == "c"
    assert extract_signature("header.payload.signature") == "signature"
    assert extract_signature("a.b.c.d") == "c"


@pytest.mark.parametrize("token", ["", "invalid", "a.b", "ab."])
def test_extract_signature_needs_two_separators(token):
    assert extract_signature(token) == ""


def test_sign_same_payload_gives_same_token(codec):
    token = codec.sign(CLAIMS)
    assert token == codec.sign(CLAIMS)
    assert token.count(".") == 2
    assert codec.verify(token) == CLAIMS


def test_verify_rejects_other_secret(codec):
    other = TokenCodec(Settings(jwt_secret="some-other-secret-that-is-long-enough"))
    with pytest.raises(InvalidToken):
        codec.verify(other.sign(CLAIMS))


def test_verify_rejects_tampered_payload(codec):
    token = codec.sign(CLAIMS)
    header, _, signature = token.split(".")
    forged = jwt.encode({**CLAIMS, "roles": [{"role": "admin"}]}, "x" * 40, algorithm="HS256").split(".")[1]
    with pytest.raises(InvalidToken):
        codec.verify(f"{header}.{forged}.{signature}")


@pytest.mark.parametrize("token", ["", "garbage", "invalid.token.here", "a.b.c.d", None])
def test_verify_rejects_malformed(codec, token):
    with pytest.raises(InvalidToken):
        codec.verify(token)
