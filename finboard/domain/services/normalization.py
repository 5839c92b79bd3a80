"""Domain normalization helpers."""


def normalize_currency(code: str | None) -> str | None:
    """Normalize ISO currency codes.

    Args:
        code: Raw currency code from a record or user setting.

    Returns:
        str | None: Upper-cased code, or None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned.upper() if cleaned else None


__all__ = ["normalize_currency"]
