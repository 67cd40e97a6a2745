import pytest

from totp_authenticator.otp import base32
from totp_authenticator.otp.errors import InvalidSecret


def test_decode_rfc4648_vectors() -> None:
    assert base32.decode("MZXW6===") == b"foo"
    assert base32.decode("MZXW6YTBOI======") == b"foobar"
    assert base32.decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_decode_ignores_separators_and_case() -> None:
    canonical = base32.decode("JBSWY3DP")
    assert canonical == b"Hello"
    assert base32.decode("jbsw y3dp") == canonical
    assert base32.decode("JBSW-Y3DP") == canonical
    assert base32.decode(" jbsw\ty3dp\n") == canonical


def test_decode_skips_invalid_characters() -> None:
    assert base32.decode("JB!SW.Y3D1P") == b"Hello"


def test_decode_drops_partial_trailing_byte() -> None:
    # 3 chars carry 15 bits: one whole byte, 7 bits discarded.
    assert len(base32.decode("ABC")) == 1
    assert base32.decode("A") == b""


@pytest.mark.parametrize("count", range(0, 17))
def test_decode_length_matches_valid_character_count(count: int) -> None:
    assert len(base32.decode("A" * count + "!" * 3)) == (5 * count) // 8


def test_decode_empty_or_garbage_yields_no_bytes() -> None:
    assert base32.decode("") == b""
    assert base32.decode("!!!") == b""
    assert base32.decode("  -- == ") == b""


def test_strict_mode_rejects_invalid_characters() -> None:
    with pytest.raises(InvalidSecret):
        base32.decode("JBSW!Y3DP", strict=True)
    with pytest.raises(InvalidSecret):
        base32.decode("JBSWY3D1", strict=True)


def test_strict_mode_still_accepts_separators() -> None:
    assert base32.decode("jbsw-y3dp==", strict=True) == b"Hello"


def test_normalize() -> None:
    assert base32.normalize(" jbsw-y3dp = ") == "JBSWY3DP"
