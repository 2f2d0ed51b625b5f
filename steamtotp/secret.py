from __future__ import annotations

import base64
import binascii
import re

from .constants import HEX_SECRET_LENGTH
from .enums import SecretFormat
from .utils import InvalidSecretFormat

HEX_SECRET_PATTERN = re.compile(rf"^[0-9a-f]{{{HEX_SECRET_LENGTH}}}$", re.IGNORECASE)

RawSecret = bytes | bytearray | memoryview
Secret = str | RawSecret


def detect_secret_format(secret: Secret) -> SecretFormat:
    """Return the format `normalize_secret` would decode `secret` as."""
    if isinstance(secret, str):
        if HEX_SECRET_PATTERN.match(secret.strip()):
            return SecretFormat.HEX
        return SecretFormat.BASE64
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return SecretFormat.RAW
    raise InvalidSecretFormat(
        f"Secret must be a hex string, a base64 string or bytes, "
        f"not {type(secret).__name__}"
    )


def _decode_hex(secret: str) -> bytes:
    try:
        return bytes.fromhex(secret.strip())
    except ValueError as e:
        raise InvalidSecretFormat("Secret is not a valid hex string") from e


def _decode_base64(secret: str) -> bytes:
    # padding may be missing and line breaks may be embedded, as atob allows
    secret = "".join(secret.split())
    if len(secret) % 4 == 1:
        raise InvalidSecretFormat("Secret is not a valid base64 string")
    secret += "=" * (-len(secret) % 4)
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSecretFormat("Secret is not a valid base64 string") from e


def normalize_secret(
    secret: Secret,
    secret_format: SecretFormat = SecretFormat.AUTO,
) -> bytes:
    """Turn a shared or identity secret into the bytes used as an HMAC key.

    With `SecretFormat.AUTO` a string of exactly 40 hex digits is decoded as
    hex, any other string as base64, and byte sequences are passed through.
    An explicit format skips the detection and forces that decoder.
    """
    if secret_format == SecretFormat.AUTO:
        secret_format = detect_secret_format(secret)

    if secret_format == SecretFormat.RAW:
        if not isinstance(secret, (bytes, bytearray, memoryview)):
            raise InvalidSecretFormat("Raw secrets must be a byte sequence")
        return bytes(secret)

    if not isinstance(secret, str):
        raise InvalidSecretFormat(
            f"{secret_format.value} secrets must be a string, "
            f"not {type(secret).__name__}"
        )
    if secret_format == SecretFormat.HEX:
        return _decode_hex(secret)
    return _decode_base64(secret)
