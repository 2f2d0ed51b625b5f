from .enums import ConfirmationTag, SecretFormat
from .models import TimeOffset
from .secret import detect_secret_format, normalize_secret
from .totp import (
    generate_auth_code,
    generate_confirmation_key,
    get_auth_code,
    get_confirmation_key,
    get_device_id,
    get_time,
    hmac_sha1,
    seconds_remaining,
)
from .utils import InvalidSecretFormat, SteamTotpException

__version__ = "1.0.0"
