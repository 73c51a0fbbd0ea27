"""Domain normalization helpers."""


def normalize_currency(currency: str | None) -> str | None:
    """Normalize currency codes.

    Args:
        currency: Raw currency code from a repository or form.

    Returns:
        str | None: Upper-cased code, or None when empty.
    """
    if not currency:
        return None
    cleaned = currency.strip()
    return cleaned.upper() if cleaned else None


def normalize_category(category: str | None) -> str | None:
    """Normalize account category values.

    Args:
        category: Raw category value (e.g. ``" cash "``).

    Returns:
        str | None: Upper-cased category, or None when empty.
    """
    if not category:
        return None
    cleaned = category.strip()
    return cleaned.upper() if cleaned else None


__all__ = ["normalize_currency", "normalize_category"]
