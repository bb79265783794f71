"""
==============================================================================
SKU Derivation Module
==============================================================================

Pre-commit functions that derive the write-time fields of a product.
They are called explicitly by the lifecycle manager right before a record
is persisted, never from ORM event hooks.

SKU format:
----------
    CT-<COUNTRY>-<N>

Two numbering schemes coexist:

- creation: N = number of records (tombstoned included) before the insert, + 1
- country change on update: N = the record's own id

The two only agree while ids and creation order stay in lockstep.

==============================================================================
"""

SKU_PREFIX = "CT"


def normalize_country(value: str) -> str:
    """
    Normalize a country value to its first two characters, uppercased.

    Raises:
        ValueError: If fewer than two characters remain after trimming

    Example:
        >>> normalize_country("mex")
        'ME'
    """
    country = value.strip()[:2].upper()
    if len(country) != 2:
        raise ValueError(f"Country needs two characters, got: {value!r}")
    return country


def format_sku(country: str, sequence: int) -> str:
    return f"{SKU_PREFIX}-{normalize_country(country)}-{sequence}"


def creation_sku(country: str, existing_count: int) -> str:
    """
    SKU for a new record.

    Args:
        country: Country code of the new record
        existing_count: Total records in the store before this insert

    Example:
        >>> creation_sku("mx", 3)
        'CT-MX-4'
    """
    return format_sku(country, existing_count + 1)


def update_sku(country: str, product_id: int) -> str:
    """
    SKU for a record whose country changed.

    Uses the record's id as the sequence component, not the creation counter.

    Example:
        >>> update_sku("ca", 7)
        'CT-CA-7'
    """
    return format_sku(country, product_id)
