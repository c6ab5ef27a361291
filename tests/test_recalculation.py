"""Tests for the recalculation service."""

import math

import pytest

from conftest import make_ingredients
from services.calculations import (
    calculate_total_weight,
    get_total_flour_weight,
    get_flour_count,
    round_to,
    percentage_of,
    amount_for,
)
from services.recalculation import (
    recalculate,
    update_amount,
    update_percentage,
    toggle_flour,
    set_total_weight,
    remove_ingredient,
    reorder_ingredients,
    add_ingredient,
    update_name,
)


def by_name(ingredients):
    return {ing.name: ing for ing in ingredients}


def assert_bakers_law(ingredients, tolerance=0.01):
    total_flour = get_total_flour_weight(ingredients)
    assert total_flour > 0
    for ing in ingredients:
        if ing.is_flour:
            assert ing.percentage == 100
        else:
            assert abs(ing.amount - ing.percentage / 100 * total_flour) <= tolerance, ing


def assert_all_finite(ingredients):
    for ing in ingredients:
        assert math.isfinite(ing.amount), ing
        assert math.isfinite(ing.percentage), ing


# ============================================
# Calculations
# ============================================

def test_totals(pizza):
    assert calculate_total_weight(pizza) == 1632
    assert get_total_flour_weight(pizza) == 1000
    assert get_flour_count(pizza) == 1


def test_round_to_rounds_halves_up():
    assert round_to(0.125, 2) == 0.13
    assert round_to(0.375, 2) == 0.38
    assert round_to(2.25, 1) == 2.3
    assert round_to(700.0000000000001, 2) == 700


# ============================================
# Amount edits
# ============================================

def test_flour_amount_edit_rescales_other_amounts(dough):
    result = by_name(update_amount(dough, 1, 500))

    assert result['Flour'].amount == 500
    assert result['Water'].amount == pytest.approx(300)
    assert result['Salt'].amount == pytest.approx(10)
    assert result['Water'].percentage == 60
    assert result['Salt'].percentage == 2


def test_non_flour_amount_edit_updates_only_its_percentage(dough):
    result = by_name(update_amount(dough, 2, 650))

    assert result['Water'].amount == 650
    assert result['Water'].percentage == pytest.approx(65)
    assert result['Flour'] == dough[0]
    assert result['Salt'] == dough[2]


def test_percentage_is_rounded_to_two_places(dough):
    result = by_name(update_amount(dough, 2, 333.333))
    assert result['Water'].percentage == 33.33


def test_flour_amount_edit_to_zero_leaves_others_unchanged(dough):
    result = update_amount(dough, 1, 0)

    assert result[0].amount == 0
    assert result[1:] == dough[1:]


def test_amount_edit_with_several_flours():
    ingredients = make_ingredients(
        ('Flour', True, 1000.0, 100.0),
        ('Water', False, 600.0, 60.0),
        ('Salt', False, 20.0, 2.0),
        ('Rye', True, 250.0, 100.0),
    )

    result = by_name(update_amount(ingredients, 4, 0))
    assert result['Water'].amount == pytest.approx(600)

    result = by_name(update_amount(ingredients, 1, 750))
    assert result['Water'].amount == pytest.approx(600)
    assert result['Salt'].amount == pytest.approx(20)


def test_invalid_amount_is_a_no_op(dough):
    assert update_amount(dough, 2, -5) is dough
    assert update_amount(dough, 2, float('nan')) is dough
    assert update_amount(dough, 2, float('inf')) is dough
    assert update_amount(dough, 2, '650') is dough


def test_amount_edit_on_missing_id_is_a_no_op(dough):
    assert update_amount(dough, 99, 100) is dough


# ============================================
# Percentage edits
# ============================================

def test_percentage_edit_derives_amount(dough):
    result = by_name(update_percentage(dough, 2, 70))

    assert result['Water'].percentage == 70
    assert result['Water'].amount == pytest.approx(700)
    assert result['Flour'] == dough[0]
    assert result['Salt'] == dough[2]


def test_percentage_edit_on_flour_is_a_no_op(dough):
    assert update_percentage(dough, 1, 80) is dough


def test_percentage_edit_without_flour_gives_zero_amount():
    ingredients = make_ingredients(('Flour', True, 0.0, 100.0), ('Water', False, 0.0, 60.0))
    result = update_percentage(ingredients, 2, 75)

    assert result[1].percentage == 75
    assert result[1].amount == 0


# ============================================
# Flour toggling
# ============================================

def test_toggle_to_flour_keeps_proportions():
    ingredients = make_ingredients(
        ('Flour', True, 1000.0, 100.0),
        ('Water', False, 600.0, 60.0),
        ('Salt', False, 20.0, 2.0),
        ('Rye', False, 200.0, 20.0),
    )

    result = by_name(toggle_flour(ingredients, 4))

    assert result['Rye'].is_flour
    assert result['Rye'].amount == 200
    assert result['Rye'].percentage == 100
    # Water and salt keep their percentages against 1200 g of flour
    assert result['Water'].percentage == 60
    assert result['Water'].amount == pytest.approx(720)
    assert result['Salt'].amount == pytest.approx(24)
    assert_bakers_law(tuple(result.values()))


def test_toggle_from_flour_recomputes_own_percentage():
    ingredients = make_ingredients(
        ('Flour', True, 1000.0, 100.0),
        ('Water', False, 600.0, 60.0),
        ('Salt', False, 20.0, 2.0),
        ('Rye', True, 250.0, 100.0),
    )

    result = by_name(toggle_flour(ingredients, 4))

    assert not result['Rye'].is_flour
    assert result['Rye'].amount == 250
    assert result['Rye'].percentage == pytest.approx(25)
    assert result['Water'].amount == pytest.approx(600)


def test_toggle_only_flour_does_not_promote_or_produce_nan():
    ingredients = make_ingredients(('Flour', True, 1000.0, 100.0), ('Water', False, 600.0, 60.0))

    result = toggle_flour(ingredients, 1)

    assert get_flour_count(result) == 0
    assert result[0].amount == 1000
    assert result[0].percentage == 100
    assert result[1].percentage == 60
    assert_all_finite(result)


def test_toggle_missing_id_is_a_no_op(dough):
    assert toggle_flour(dough, 42) is dough


# ============================================
# Rescaling
# ============================================

def test_rescale_doubles_every_amount(pizza):
    result = set_total_weight(pizza, 3264)

    assert [ing.amount for ing in result] == pytest.approx([2000, 1200, 60, 4], abs=0.1)
    assert [ing.percentage for ing in result] == [ing.percentage for ing in pizza]


def test_rescale_to_current_total_changes_nothing(pizza):
    result = set_total_weight(pizza, calculate_total_weight(pizza))
    assert [ing.amount for ing in result] == [ing.amount for ing in pizza]


def test_rescale_rounds_to_one_decimal(pizza):
    result = set_total_weight(pizza, 1000)
    for ing in result:
        assert ing.amount == round_to(ing.amount, 1)


def test_rescale_rejects_negative_target_and_empty_recipe(pizza):
    assert set_total_weight(pizza, -1) is pizza
    assert set_total_weight(pizza, float('nan')) is pizza

    empty = make_ingredients(('Flour', True, 0.0, 100.0), ('Water', False, 0.0, 60.0))
    assert set_total_weight(empty, 500) is empty


# ============================================
# Removal, reordering, naming
# ============================================

def test_removing_last_flour_promotes_first_remaining(pizza):
    result = by_name(remove_ingredient(pizza, 1))

    assert 'Flour' not in result
    assert result['Water'].is_flour
    assert result['Water'].percentage == 100
    assert result['Water'].amount == 600
    assert result['Salt'].amount == pytest.approx(18)
    assert result['Yeast'].amount == pytest.approx(1.2)
    assert_bakers_law(tuple(result.values()))


def test_removing_never_leaves_list_without_flour(pizza):
    ingredients = pizza
    while ingredients:
        ingredients = remove_ingredient(ingredients, ingredients[0].id)
        if ingredients:
            assert get_flour_count(ingredients) >= 1


def test_removing_non_flour_keeps_others(pizza):
    result = remove_ingredient(pizza, 3)
    assert [ing.name for ing in result] == ['Flour', 'Water', 'Yeast']
    assert result[1] == pizza[1]


def test_remove_missing_id_is_a_no_op(pizza):
    assert remove_ingredient(pizza, 99) is pizza


def test_reorder_moves_dragged_to_target_position(pizza):
    result = reorder_ingredients(pizza, 4, 2)
    assert [ing.name for ing in result] == ['Flour', 'Yeast', 'Water', 'Salt']

    result = reorder_ingredients(pizza, 1, 4)
    assert [ing.name for ing in result] == ['Water', 'Salt', 'Yeast', 'Flour']

    assert sorted(result, key=lambda ing: ing.id) == list(pizza)


def test_reorder_with_missing_id_is_a_no_op(pizza):
    assert reorder_ingredients(pizza, 1, 99) is pizza
    assert reorder_ingredients(pizza, 99, 1) is pizza


def test_add_and_rename(pizza):
    result = add_ingredient(pizza, 5)
    assert result[-1].id == 5
    assert not result[-1].is_flour
    assert result[-1].amount == 0

    result = update_name(result, 5, 'Olive Oil')
    assert result[-1].name == 'Olive Oil'
    assert add_ingredient(result, 5) is result


def test_recalculate_without_flour_is_unchanged():
    ingredients = make_ingredients(('Water', False, 600.0, 60.0))
    assert recalculate(ingredients) == ingredients


# ============================================
# Properties across edit sequences
# ============================================

def test_bakers_law_holds_after_each_edit(pizza):
    ingredients = pizza
    edits = [
        lambda ings: update_amount(ings, 1, 800),
        lambda ings: update_percentage(ings, 2, 72.5),
        lambda ings: update_amount(ings, 3, 20),
        lambda ings: toggle_flour(ings, 4),
        lambda ings: toggle_flour(ings, 4),
        lambda ings: remove_ingredient(ings, 1),
        lambda ings: reorder_ingredients(ings, 4, 2),
    ]
    for edit in edits:
        ingredients = edit(ingredients)
        assert_bakers_law(ingredients)


def test_zero_flour_edits_stay_finite():
    ingredients = make_ingredients(('Flour', True, 0.0, 100.0), ('Water', False, 0.0, 60.0))
    edits = [
        lambda ings: update_amount(ings, 2, 100),
        lambda ings: update_percentage(ings, 2, 80),
        lambda ings: update_amount(ings, 1, 0),
        lambda ings: toggle_flour(ings, 1),
        lambda ings: toggle_flour(ings, 2),
        lambda ings: set_total_weight(ings, 500),
    ]
    for edit in edits:
        ingredients = edit(ingredients)
        assert_all_finite(ingredients)


def test_edits_do_not_mutate_input(pizza):
    before = list(pizza)
    update_amount(pizza, 1, 10)
    toggle_flour(pizza, 2)
    remove_ingredient(pizza, 1)
    assert list(pizza) == before


# ============================================
# Values too large to represent
# ============================================

def test_round_to_leaves_huge_values_alone():
    assert round_to(1e307, 2) == 1e307
    assert round_to(1.7e308, 1) == 1.7e308


def test_derived_helpers_report_overflow():
    assert percentage_of(1e308, 1e-10) is None
    assert amount_for(1e300, 1e300) is None
    assert amount_for(60, 0) == 0


def test_huge_flour_amount_stays_finite(dough):
    result = update_amount(dough, 1, 1e307)

    assert result[0].amount == 1e307
    assert result[1].amount == pytest.approx(6e306)
    assert_all_finite(result)


def test_overflowing_amount_edits_are_no_ops():
    tiny_flour = make_ingredients(('Flour', True, 1e-300, 100.0), ('Water', False, 0.0, 60.0))
    assert update_amount(tiny_flour, 2, 1e300) is tiny_flour

    heavy_water = make_ingredients(('Flour', True, 1.0, 100.0), ('Water', False, 10.0, 1000.0))
    assert update_amount(heavy_water, 1, 1.7e308) is heavy_water


def test_overflowing_percentage_edit_is_a_no_op():
    ingredients = make_ingredients(('Flour', True, 1e306, 100.0), ('Water', False, 6e305, 60.0))
    assert update_percentage(ingredients, 2, 1e300) is ingredients


def test_overflowing_rescale_is_a_no_op(dough):
    assert set_total_weight(dough, 1e308) is dough


def test_overflowing_flour_total_is_a_no_op():
    ingredients = make_ingredients(
        ('Flour', True, 1.5e308, 100.0),
        ('Rye', False, 1.5e308, 100.0),
        ('Water', False, 0.0, 60.0),
    )
    assert toggle_flour(ingredients, 2) is ingredients


def test_overflowing_recalculation_is_a_no_op():
    ingredients = make_ingredients(('Flour', True, 1e308, 100.0), ('Water', False, 0.0, 1000.0))
    assert recalculate(ingredients) is ingredients

    ingredients = make_ingredients(
        ('Flour', True, 1.0, 100.0),
        ('Water', False, 1e308, 1e10),
        ('Salt', False, 0.0, 1000.0),
    )
    assert remove_ingredient(ingredients, 1) is ingredients
