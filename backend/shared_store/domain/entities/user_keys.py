"""Ledger keys for data owned by a single user.

A user's saved items are not a shared document, but they are backed up in
the same ledger under ``saved_items:<userId>`` so browse, preview and
restore work on them unchanged.
"""

SAVED_ITEMS = "saved_items"
_SAVED_ITEMS_PREFIX = f"{SAVED_ITEMS}:"


def saved_items_key(user_id: str) -> str:
    return f"{_SAVED_ITEMS_PREFIX}{user_id}"


def saved_items_owner(data_key: str) -> str | None:
    """The user id in a ``saved_items:<userId>`` key, or None for shared keys."""
    if data_key.startswith(_SAVED_ITEMS_PREFIX):
        return data_key[len(_SAVED_ITEMS_PREFIX):] or None
    return None


def policy_key(data_key: str) -> str:
    """Key whose collection policy governs ``data_key``.

    Per-user keys share the policy of their collection.
    """
    if saved_items_owner(data_key) is not None:
        return SAVED_ITEMS
    return data_key
