"""Identity keys for configured menu items."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .constants import KEY_GROUP_SEPARATOR, KEY_MEMBER_SEPARATOR


def extra_name(extra: Any) -> str:
    """Return the name of an extra given as object, dict or plain string."""
    if isinstance(extra, str):
        return extra
    if isinstance(extra, dict):
        return str(extra.get("name", ""))
    return str(getattr(extra, "name", ""))


def compute_key(
    menu_item_id: str,
    selected_components: Iterable[str] | None,
    selected_extras: Iterable[Any] | None,
) -> str:
    """Build the identity of a menu item configuration.

    The key does not depend on the order of the selections: components are
    sorted by name, extras are sorted by name and only their names take part
    (an extra carries one price within a menu). Duplicates collapse.

    Example:
        >>> compute_key("burger", ["bun", "onion"], [{"name": "Cheese", "price": 1}])
        'burger\\x1fbun\\x1eonion\\x1fCheese'
    """
    components = sorted({str(name) for name in selected_components or ()})
    extras = sorted({extra_name(extra) for extra in selected_extras or ()})
    return KEY_GROUP_SEPARATOR.join(
        (
            str(menu_item_id),
            KEY_MEMBER_SEPARATOR.join(components),
            KEY_MEMBER_SEPARATOR.join(extras),
        )
    )
