from ..utils import SteamTotpException


class SteamTotpApiException(SteamTotpException):
    pass


class TimeSyncFailed(SteamTotpApiException):
    def __init__(
        self,
        name: str,
        response_status_code: int | None = None,
        response_text: str | None = None,
    ):
        if response_status_code is None:
            message = f"{name} request failed"
        else:
            message = (
                f"{name} request failed with status code "
                f"{response_status_code}: {response_text}"
            )
        super().__init__(message)
        self.response_status_code = response_status_code
        self.response_text = response_text


class MalformedResponse(SteamTotpApiException):
    def __init__(
        self,
        name: str,
        response_text: str,
    ):
        super().__init__(f"{name} response is malformed: {response_text}")
        self.response_text = response_text
