from enum import Enum


class SecretFormat(Enum):
    AUTO = "auto"
    HEX = "hex"
    BASE64 = "base64"
    RAW = "raw"


class ConfirmationTag(Enum):
    CONF = "conf"
    DETAILS = "details"
    ALLOW = "allow"
    CANCEL = "cancel"


class OutputMode(Enum):
    CODE = "code"
    CONFIRMATION_KEY = "confirmation-key"
    DEVICE_ID = "device-id"
