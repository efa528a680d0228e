"""Username and password validation and the salted password encoding."""

from __future__ import annotations

import base64
import binascii
import hashlib
import os
import unicodedata

_SALT_SIZE = 4
_SHA1_SIZE = 20


class PasswordFormatError(ValueError):
    """A stored password is neither a legacy digest nor a valid salted hash."""


def _is_username_char(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category[0] in ("L", "N") or ch.isupper() or ch == "_"


def is_valid_username(username: str) -> bool:
    """Check a username: 3 to 20 UTF-8 bytes of letters, digits and underscores."""
    size = len(username.encode("utf-8"))
    if size < 3 or size > 20:
        return False
    return all(_is_username_char(ch) for ch in username)


def is_valid_password(password: str) -> bool:
    """Check a password is between 6 and 20 UTF-8 bytes long."""
    size = len(password.encode("utf-8"))
    return 6 <= size <= 20


def _md5_hex(password: str) -> str:
    return hashlib.md5(password.encode("utf-8")).hexdigest()


def encode_password(password: str, salt: bytes | None = None) -> str:
    """Encode a password as base64(sha1(md5hex(password) + salt) + salt).

    A random 4-byte salt is drawn when none is given.
    """
    if salt is None:
        salt = os.urandom(_SALT_SIZE)
    digest = hashlib.sha1(_md5_hex(password).encode("ascii") + salt).digest()
    return base64.b64encode(digest + salt).decode("ascii")


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored legacy MD5 digest or salted hash.

    Raises PasswordFormatError when the stored value cannot be decoded.
    """
    if _md5_hex(password) == stored:
        return True
    try:
        decoded = base64.b64decode(stored, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PasswordFormatError(f"stored password is not valid base64: {exc}") from exc
    if len(decoded) <= _SHA1_SIZE:
        raise PasswordFormatError(
            f"password decoded error: len {len(decoded)}"
        )
    salt = decoded[_SHA1_SIZE:]
    return encode_password(password, salt) == stored