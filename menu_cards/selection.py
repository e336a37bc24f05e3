"""Selection mutations and required-category validation."""

from __future__ import annotations

from typing import Iterable

from menu_cards.models import SENTINEL, ItemOptions, SelectionState, SideCategory, ToggleOutcome


def toggle_side_selection(state: SelectionState, category: SideCategory, item_name: str) -> ToggleOutcome:
    """
    Toggle one side item while keeping the category under its cap.

    A cap of 1 swaps the previous choice out. A full bounded category rejects
    the click and leaves the state untouched.
    """
    if category.item(item_name) is None:
        raise ValueError(f"{item_name!r} is not an item of side category {category.category_name!r}")

    selected = state.sides_in(category.category_name)
    if item_name in selected:
        selected.remove(item_name)
        return ToggleOutcome.DESELECTED

    if category.max_selected == 1:
        selected.clear()
        selected.add(item_name)
        return ToggleOutcome.SELECTED

    if category.max_selected == 0 or len(selected) < category.max_selected:
        selected.add(item_name)
        return ToggleOutcome.SELECTED

    return ToggleOutcome.CATEGORY_FULL


def toggle_addition(state: SelectionState, name: str) -> bool:
    """Flip an addition on or off. Returns whether it is now selected."""
    if name in state.selected_additions:
        state.selected_additions.remove(name)
        return False
    state.selected_additions.add(name)
    return True


def select_size(state: SelectionState, options: ItemOptions, size: str) -> None:
    if size != SENTINEL and size not in options.sizes:
        raise ValueError(f"Unknown size {size!r}")
    state.selected_size = size


def select_flavour(state: SelectionState, options: ItemOptions, flavour: str) -> None:
    if flavour != SENTINEL and flavour not in options.flavours:
        raise ValueError(f"Unknown flavour {flavour!r}")
    state.selected_flavour = flavour


def adjust_quantity(state: SelectionState, delta: int) -> int:
    """Move the quantity by delta, never below 1."""
    state.quantity = max(1, state.quantity + delta)
    return state.quantity


def find_missing_required_categories(
    categories: Iterable[SideCategory], state: SelectionState
) -> list[SideCategory]:
    """Return every capped category that still has fewer picks than its cap."""
    missing: list[SideCategory] = []
    for category in categories:
        if category.max_selected <= 0:
            continue
        chosen = state.selected_sides_by_category.get(category.category_name, set())
        if len(chosen) < category.max_selected:
            missing.append(category)
    return missing


def missing_categories_message(missing: Iterable[SideCategory]) -> str:
    """Build the single blocking message listing every unmet category."""
    names = [category.display_name for category in missing]
    if not names:
        return ""

    if len(names) == 1:
        joined = names[0]
    else:
        joined = f"{', '.join(names[:-1])} and {names[-1]}"

    initial = names[0][:1].lower()
    article = "an" if initial and initial in "aeiou" else "a"
    return f"Please select {article} {joined} before adding to cart."
