"""Local add/remove edits on a weekly plan."""

from itertools import chain, repeat

import pytest

from campus_app.errors import DayIndexError, InvalidItemNameError
from evaluation.scenarios import sample_plan_json
from logic.plan_editor import add_item, generate_item_id, remove_item
from logic.plan_validation import parse_weekly_plan
from models.plan import WeeklyPlan
from models.taxonomy import WEEKDAYS, ItemType


@pytest.fixture()
def plan() -> WeeklyPlan:
    return parse_weekly_plan(sample_plan_json(list(WEEKDAYS[:5])))


def test_add_item_appends_other_item_with_fresh_id(plan: WeeklyPlan) -> None:
    before = plan[2].outfit_items

    updated = add_item(plan, 2, "Red Scarf")

    after = updated[2].outfit_items
    assert len(after) == len(before) + 1
    assert after[:-1] == before
    added = after[-1]
    assert added.name == "Red Scarf"
    assert added.type is ItemType.OTHER
    assert added.id and added.id not in {item.id for item in before}


def test_add_item_leaves_input_plan_untouched(plan: WeeklyPlan) -> None:
    snapshot = plan.to_json_data()

    add_item(plan, 0, "Red Scarf")

    assert plan.to_json_data() == snapshot


def test_add_item_only_touches_one_day(plan: WeeklyPlan) -> None:
    updated = add_item(plan, 5, "Bucket Hat")

    for index in range(7):
        if index != 5:
            assert updated[index] == plan[index]


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_item_rejects_empty_names(plan: WeeklyPlan, name) -> None:
    with pytest.raises(InvalidItemNameError):
        add_item(plan, 1, name)

    assert len(plan[1].outfit_items) == 4


def test_add_item_strips_name(plan: WeeklyPlan) -> None:
    updated = add_item(plan, 6, "  White Sneakers ")

    assert updated[6].outfit_items[-1].name == "White Sneakers"


def test_add_item_regenerates_colliding_ids(plan: WeeklyPlan) -> None:
    existing = plan[0].outfit_items[0].id
    ids = chain([existing, existing], repeat("fresh0001"))

    updated = add_item(plan, 0, "Tote Bag", id_factory=lambda: next(ids))

    assert updated[0].outfit_items[-1].id == "fresh0001"


def test_add_item_to_day_without_items() -> None:
    empty_plan = parse_weekly_plan(sample_plan_json([]))
    cleared = remove_item(remove_item(empty_plan, 3, "thu-1"), 3, "thu-2")
    assert cleared[3].outfit_items == []

    updated = add_item(cleared, 3, "Rain Boots")

    assert [item.name for item in updated[3].outfit_items] == ["Rain Boots"]


def test_remove_item_keeps_remaining_order(plan: WeeklyPlan) -> None:
    before = plan[0].outfit_items
    target = before[1].id

    updated = remove_item(plan, 0, target)

    after = updated[0].outfit_items
    assert len(after) == len(before) - 1
    assert after == [item for item in before if item.id != target]


def test_remove_unknown_item_is_a_no_op(plan: WeeklyPlan) -> None:
    updated = remove_item(plan, 0, "nonexistent")

    assert updated[0].outfit_items == plan[0].outfit_items


def test_remove_all_items_from_a_college_day_is_allowed(plan: WeeklyPlan) -> None:
    updated = plan
    for item in plan[0].outfit_items:
        updated = remove_item(updated, 0, item.id)

    assert updated[0].outfit_items == []
    assert updated[0].has_college is True


@pytest.mark.parametrize("day_index", [-1, 7, 100])
def test_edits_reject_out_of_range_days(plan: WeeklyPlan, day_index: int) -> None:
    with pytest.raises(DayIndexError):
        add_item(plan, day_index, "Scarf")
    with pytest.raises(DayIndexError):
        remove_item(plan, day_index, "mon-1")


def test_generated_ids_are_short_base36_tokens() -> None:
    token = generate_item_id()

    assert len(token) == 9
    assert token.isalnum() and token == token.lower()
