from __future__ import annotations

import itertools

from scanplate.core.configuration_key import compute_key
from scanplate.domain.menu import MenuExtra


def test_key_ignores_selection_order() -> None:
    components = ["bun", "patty", "onion"]
    extras = [{"name": "Cheese", "price": 1}, {"name": "Bacon", "price": 2.5}]

    keys = {
        compute_key("burger-1", list(comp_perm), list(extra_perm))
        for comp_perm in itertools.permutations(components)
        for extra_perm in itertools.permutations(extras)
    }

    assert len(keys) == 1


def test_key_changes_when_one_component_is_removed() -> None:
    full = compute_key("burger-1", ["bun", "patty", "onion"], [])
    no_onion = compute_key("burger-1", ["bun", "patty"], [])

    assert full != no_onion


def test_key_changes_with_extras_and_item() -> None:
    plain = compute_key("burger-1", ["bun"], [])
    cheese = compute_key("burger-1", ["bun"], [MenuExtra(name="Cheese", price=1)])
    other_item = compute_key("burger-2", ["bun"], [])

    assert len({plain, cheese, other_item}) == 3


def test_extras_are_keyed_by_name_only() -> None:
    cheap = compute_key("burger-1", [], [{"name": "Cheese", "price": 1}])
    pricey = compute_key("burger-1", [], [{"name": "Cheese", "price": 3}])

    assert cheap == pricey


def test_component_cannot_be_confused_with_extra() -> None:
    as_component = compute_key("burger-1", ["Cheese"], [])
    as_extra = compute_key("burger-1", [], ["Cheese"])

    assert as_component != as_extra


def test_joined_names_do_not_collide() -> None:
    split = compute_key("burger-1", ["a", "b"], [])
    joined = compute_key("burger-1", ["a,b"], [])

    assert split != joined


def test_missing_selections_equal_empty_selections() -> None:
    assert compute_key("salad-7", None, None) == compute_key("salad-7", [], [])
