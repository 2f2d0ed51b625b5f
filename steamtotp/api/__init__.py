from .exceptions import MalformedResponse, SteamTotpApiException, TimeSyncFailed
from .time_sync import SteamTimeSync
