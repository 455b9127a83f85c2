# app/config.py
import base64
import binascii
import json
import os

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

DEFAULT_SPREADSHEET_ID = "1WBGxzx8Tx-z1YcXTJYka9dkaSLlvBrTvoSXQKmn664g"


class ConfigurationError(RuntimeError):
    """Required configuration is missing or unreadable."""


def get_spreadsheet_id() -> str:
    return os.getenv("SPREADSHEET_ID") or DEFAULT_SPREADSHEET_ID


def formatting_enabled() -> bool:
    return os.getenv("LEDGER_FORMATTING", "true").strip().lower() not in ("0", "false", "no", "off")


def load_service_account_info() -> dict:
    """Decode the base64 service account blob from GOOGLE_CREDENTIALS."""
    encoded = os.getenv("GOOGLE_CREDENTIALS")
    if not encoded:
        raise ConfigurationError("GOOGLE_CREDENTIALS environment variable is not set")

    try:
        decoded = base64.b64decode(encoded, validate=True)
        info = json.loads(decoded)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(f"GOOGLE_CREDENTIALS is not valid base64 encoded JSON: {e}") from e

    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_CREDENTIALS must decode to a JSON object")
    return info
