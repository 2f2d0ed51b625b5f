from __future__ import annotations

CODE_ALPHABET = "23456789BCDFGHJKMNPQRTVWXY"
CODE_LENGTH = 5
TIME_STEP = 30
MAX_TIME_STEP = 2**32 - 1
MAX_TIMESTAMP = 2**64 - 1
MAX_TAG_LENGTH = 32
HEX_SECRET_LENGTH = 40

DEVICE_ID_PREFIX = "android:"

EXCLUDED_CONFIG_FILE_PARAMS = (
    "secret",
    "config_path",
    "no_config_file",
    "timestamp",
    "version",
    "help",
)
