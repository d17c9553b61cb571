"""
Security utilities - never log secrets.
"""

from typing import Any, Dict, Optional


SENSITIVE_KEY_MARKERS = (
    'token',
    'secret',
    'password',
    'api_key',
)

REDACTED = '***REDACTED***'


def _is_sensitive_key(key: Any) -> bool:
    lowered = str(key).lower().replace('-', '_')
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


def sanitize_dict_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove sensitive fields from dict for logging.

    Keys are matched case-insensitively, so both ``storefront_access_token``
    and the ``X-Shopify-Storefront-Access-Token`` header are redacted.

    Args:
        data: Dictionary that may contain secrets.

    Returns:
        Sanitized copy with secrets replaced.
    """
    result = dict(data)

    for k, v in result.items():
        if _is_sensitive_key(k) and v:
            result[k] = REDACTED
        elif isinstance(v, dict):
            result[k] = sanitize_dict_for_logging(v)
        elif isinstance(v, list):
            result[k] = [
                sanitize_dict_for_logging(item) if isinstance(item, dict) else item
                for item in v
            ]

    return result


def sanitize_string_for_logging(text: str, secret: Optional[str] = None) -> str:
    """
    Mask every occurrence of a known secret value in a string.

    Args:
        text: String that may contain the secret.
        secret: The secret value to mask.

    Returns:
        Sanitized string.
    """
    if not text or not secret:
        return text
    return text.replace(secret, REDACTED)
