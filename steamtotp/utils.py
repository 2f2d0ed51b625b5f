from __future__ import annotations

import json

import colorama
import httpx


class SteamTotpException(Exception):
    pass


def safe_json(response: httpx.Response) -> dict | None:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def color_text(text: str, color) -> str:
    return color + text + colorama.Style.RESET_ALL


class InvalidSecretFormat(SteamTotpException, ValueError):
    pass
