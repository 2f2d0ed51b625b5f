from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import time

from .constants import (
    CODE_ALPHABET,
    CODE_LENGTH,
    DEVICE_ID_PREFIX,
    MAX_TAG_LENGTH,
    MAX_TIME_STEP,
    MAX_TIMESTAMP,
    TIME_STEP,
)
from .enums import ConfirmationTag
from .secret import Secret, normalize_secret

logger = logging.getLogger(__name__)


def get_time(time_offset: int = 0) -> int:
    return int(time.time()) + int(time_offset)


def seconds_remaining(time_offset: int = 0) -> int:
    return TIME_STEP - get_time(time_offset) % TIME_STEP


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    return hmac.new(key, message, hashlib.sha1).digest()


def generate_auth_code(secret: Secret, time_offset: int = 0) -> str:
    """Generate the 5 character Steam Guard code for the current window.

    `time_offset` is added to the local clock, typically the offset measured
    by `SteamTimeSync`.
    """
    secret = normalize_secret(secret)

    timestamp = get_time(time_offset)
    if timestamp < 0:
        raise ValueError(f"Time must not be negative, got {timestamp}")
    counter = timestamp // TIME_STEP
    if counter > MAX_TIME_STEP:
        raise ValueError(f"Time step {counter} does not fit in 32 bits")
    counter_bytes = counter.to_bytes(8, "big")

    hmac_result = hmac_sha1(secret, counter_bytes)

    offset = hmac_result[-1] & 0x0F
    binary = (
        (hmac_result[offset] & 0x7F) << 24
        | (hmac_result[offset + 1] & 0xFF) << 16
        | (hmac_result[offset + 2] & 0xFF) << 8
        | (hmac_result[offset + 3] & 0xFF)
    )

    # Steam emits the least significant digit first
    code = ""
    for _ in range(CODE_LENGTH):
        binary, index = divmod(binary, len(CODE_ALPHABET))
        code += CODE_ALPHABET[index]

    logger.debug(f"Generated auth code for time step {counter}")

    return code


def generate_confirmation_key(
    identity_secret: Secret,
    timestamp: int,
    tag: str | ConfirmationTag | None = None,
) -> str:
    """Sign a mobile confirmation request and return the base64 key."""
    identity_secret = normalize_secret(identity_secret)

    if not 0 <= timestamp <= MAX_TIMESTAMP:
        raise ValueError(f"Timestamp {timestamp} does not fit in 64 bits")

    if isinstance(tag, ConfirmationTag):
        tag = tag.value
    tag_bytes = tag.encode("utf-8")[:MAX_TAG_LENGTH] if tag else b""

    buffer = int(timestamp).to_bytes(8, "big") + tag_bytes

    return base64.b64encode(hmac_sha1(identity_secret, buffer)).decode("ascii")


def get_device_id(steam_id) -> str:
    hexed_steam_id = hashlib.sha1(str(steam_id).encode("utf-8")).hexdigest()
    return DEVICE_ID_PREFIX + "-".join(
        (
            hexed_steam_id[:8],
            hexed_steam_id[8:12],
            hexed_steam_id[12:16],
            hexed_steam_id[16:20],
            hexed_steam_id[20:32],
        )
    )


get_auth_code = generate_auth_code
get_confirmation_key = generate_confirmation_key
