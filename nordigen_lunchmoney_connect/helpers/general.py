from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive chunks of at most size items.

    The chunks preserve the order of items. An empty sequence results in no chunks.
    """
    if size < 1:
        msg = f"Chunk size should be at least 1, got {size}"
        raise ValueError(msg)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def parse_list(value: str | None) -> list[str]:
    """Parse a comma separated environment variable into a list."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_mapping(value: str | None) -> dict[str, int]:
    """Parse a mapping from Nordigen account id to Lunchmoney asset id.

    Format: "account_id:asset_id,other_account_id:other_asset_id".
    """
    mapping = {}
    for item in parse_list(value):
        account_id, separator, asset_id = item.partition(":")
        account_id, asset_id = account_id.strip(), asset_id.strip()
        if not separator or not account_id or not asset_id.isdigit():
            msg = f"Invalid mapping item {item!r}, expected account_id:asset_id"
            raise ValueError(msg)
        mapping[account_id] = int(asset_id)
    return mapping
