"""
Transaction identifier and gateway token generation.
Format: "TXN-" + 32 uppercase hex characters (128 random bits).
"""

import secrets

TRANSACTION_ID_PREFIX = "TXN-"
TRANSACTION_ID_BYTES = 16
GATEWAY_TOKEN_BYTES = 8


def generate_transaction_id() -> str:
    """
    Generate a fresh transaction identifier.

    Uses secrets so ids cannot be predicted from earlier ones. The store still
    enforces uniqueness; callers retry on the (negligible) chance of a clash.

    Example:
        TXN-3F9A0C41D2B7E65A9C0D4E1F2A3B4C5D
    """
    return TRANSACTION_ID_PREFIX + secrets.token_hex(TRANSACTION_ID_BYTES).upper()


def generate_gateway_token() -> str:
    """Opaque checkout token embedded in the payment gateway URL."""
    return secrets.token_hex(GATEWAY_TOKEN_BYTES)


def build_gateway_url(base_url: str, token: str) -> str:
    return f"{base_url}?token={token}"
