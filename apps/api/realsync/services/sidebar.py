"""Sidebar badge helpers."""
from __future__ import annotations

from typing import Mapping, Sequence

from ..data.sidebars import MenuItem
from ..schemas.notifications import MenuBadge


def format_badge(count: int, cap: int = 99) -> str | None:
    """Render a badge label, or None when there is nothing to show."""

    if count <= 0:
        return None
    if count > cap:
        return f"{cap}+"
    return str(count)


def menu_count(menu: MenuItem, counts: Mapping[str, int]) -> int:
    """Return a menu's own count plus the counts of its sub-menus."""

    base = counts.get(menu.path, 0)
    return base + sum(counts.get(sub.path, 0) for sub in menu.sub_menu)


def menu_badges(
    menus: Sequence[MenuItem],
    counts: Mapping[str, int],
    *,
    cap: int = 99,
) -> list[MenuBadge]:
    """Build badge entries for every menu, keyed by sidebar path counts."""

    badges = []
    for menu in menus:
        count = menu_count(menu, counts)
        badges.append(
            MenuBadge(
                name=menu.name,
                path=menu.path,
                description=menu.description,
                count=count,
                badge=format_badge(count, cap),
            )
        )
    return badges
