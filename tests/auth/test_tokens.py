from jose import jwt

from congregation_attendance.auth.tokens import TokenDecoder, TokenSettings

KEY = "test-jwt-key"


def _token(claims, key=KEY):
    return jwt.encode(claims, key, algorithm="HS256")


def test_decode_valid_token():
    decoder = TokenDecoder(TokenSettings(key=KEY))

    identity = decoder.from_header("Bearer " + _token({"sub": "user_1", "publicMetadata": {"role": "admin"}}))

    assert identity.subject == "user_1"
    assert identity.role == "admin"


def test_bad_signature_or_missing_subject_is_anonymous():
    decoder = TokenDecoder(TokenSettings(key=KEY))

    assert decoder.decode(_token({"sub": "user_1"}, key="other")) is None
    assert decoder.decode(_token({"name": "no subject"})) is None
    assert decoder.decode("not-a-jwt") is None


def test_header_parsing():
    decoder = TokenDecoder(TokenSettings(key=KEY))
    token = _token({"sub": "user_1"})

    assert decoder.from_header(None) is None
    assert decoder.from_header("Basic " + token) is None
    assert decoder.from_header("Bearer ") is None
    assert decoder.from_header("bearer " + token).subject == "user_1"


def test_audience_checked_when_configured():
    decoder = TokenDecoder(TokenSettings(key=KEY, audience="attendance"))

    assert decoder.decode(_token({"sub": "u", "aud": "attendance"})).subject == "u"
    assert decoder.decode(_token({"sub": "u", "aud": "elsewhere"})) is None
