"""
tests.test_domain

Parsing rules and redaction for the credential value types.
"""

from __future__ import annotations

import uuid

import pytest

from rota_auth.domain import (
    Email,
    LoginAttemptId,
    MalformedHashError,
    Password,
    PasswordHash,
    TwoFACode,
    UserId,
    ValidationError,
)


@pytest.mark.parametrize("raw", ["a@b.com", "first.last@example.com", "user+tag@sub.example.org"])
def test_email_accepts_valid_addresses(raw: str) -> None:
    assert Email.parse(raw).expose_secret() == raw


@pytest.mark.parametrize("raw", ["", "no-at-sign", "@example.com", "user@", "two@@example.com"])
def test_email_rejects_malformed_addresses(raw: str) -> None:
    with pytest.raises(ValidationError) as exc:
        Email.parse(raw)
    assert exc.value.code == "invalid_email"


def test_email_is_redacted_and_masked() -> None:
    email = Email.parse("alice@example.com")
    assert "alice" not in repr(email)
    assert "alice" not in str(email)
    assert email.masked() == "a***@example.com"


def test_email_equality_and_hash_follow_value() -> None:
    assert Email.parse("a@b.com") == Email.parse("a@b.com")
    assert Email.parse("a@b.com") != Email.parse("c@b.com")
    assert len({Email.parse("a@b.com"), Email.parse("a@b.com")}) == 1


def test_secret_types_do_not_compare_across_kinds() -> None:
    assert Password.parse("12345678") != TwoFACode.parse("123456")
    assert Email.parse("a@b.com") != "a@b.com"


def test_password_length_bounds() -> None:
    with pytest.raises(ValidationError) as short:
        Password.parse("abcd123")
    assert short.value.message == "Too short. Should be 8 to 128 characters."

    with pytest.raises(ValidationError) as long:
        Password.parse("a" * 129)
    assert long.value.message == "Too long. Should be 8 to 128 characters."

    assert Password.parse("a" * 8).expose_secret() == "a" * 8
    assert Password.parse("a" * 128).expose_secret() == "a" * 128


def test_password_counts_code_points_not_bytes() -> None:
    # 8 code points, 32 UTF-8 bytes.
    assert Password.parse("\U0001F600" * 8)
    assert Password.parse("é" * 128)
    with pytest.raises(ValidationError):
        Password.parse("é" * 7)


def test_password_repr_is_redacted() -> None:
    password = Password.parse("hunter2hunter2")
    assert "hunter2" not in repr(password)
    assert "hunter2" not in f"{password}"


@pytest.mark.parametrize("raw", ["000000", "123456", "999999"])
def test_two_fa_code_accepts_six_digits(raw: str) -> None:
    assert TwoFACode.parse(raw).expose_secret() == raw


@pytest.mark.parametrize("raw", ["", "12345", "1234567", "12a456", " 123456", "١٢٣٤٥٦"])
def test_two_fa_code_rejects_everything_else(raw: str) -> None:
    with pytest.raises(ValidationError) as exc:
        TwoFACode.parse(raw)
    assert exc.value.code == "invalid_two_fa_code"


def test_two_fa_code_generate_is_six_ascii_digits() -> None:
    for _ in range(50):
        code = TwoFACode.generate().expose_secret()
        assert len(code) == 6
        assert code.isascii() and code.isdigit()


def test_login_attempt_id_parse_and_generate() -> None:
    generated = LoginAttemptId.generate()
    assert uuid.UUID(generated.expose_secret()).version == 4
    assert LoginAttemptId.parse(generated.expose_secret().upper()) == generated

    with pytest.raises(ValidationError) as exc:
        LoginAttemptId.parse("not-a-uuid")
    assert exc.value.code == "invalid_login_attempt_id"


def test_user_id_parse_round_trip() -> None:
    uid = UserId.generate()
    assert UserId.parse(str(uid)) == uid
    with pytest.raises(ValidationError):
        UserId.parse("nope")


def test_password_hash_rejects_non_phc_strings() -> None:
    with pytest.raises(MalformedHashError):
        PasswordHash.parse("plaintext-password")


def test_password_hash_accepts_phc_strings() -> None:
    raw = "$argon2id$v=19$m=15000,t=2,p=1$c29tZXNhbHRzb21lc2FsdA$3iPdRMe9UzZf6pwbXW1ZJmrB2KHv0TErmNvxH9dWvE4"
    assert PasswordHash.parse(raw).expose_secret() == raw
