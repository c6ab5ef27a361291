"""
Calculation Helpers

Totals and rounding shared by the recalculation engine and the codec.
"""

import math


def calculate_total_weight(ingredients):
    """Sum of every ingredient amount in grams."""
    return sum(ing.amount or 0.0 for ing in ingredients)


def get_total_flour_weight(ingredients):
    """Sum of flour amounts; the denominator of every baker's percentage."""
    return sum(ing.amount or 0.0 for ing in ingredients if ing.is_flour)


def get_flour_count(ingredients):
    return sum(1 for ing in ingredients if ing.is_flour)


def round_to(value, places=2):
    """
    Round half up to a fixed number of decimal places.

    round() rounds half to even, which makes 0.125 -> 0.12 but 0.375 -> 0.38;
    baking sheets expect halves to go up consistently. Values too large to
    scale by 10**places have no fractional part left and are returned as-is.
    """
    factor = 10 ** places
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def percentage_of(amount, total_flour_weight, places=2):
    """
    Baker's percentage of amount.

    None when there is no flour to divide by or the result overflows.
    """
    if total_flour_weight <= 0:
        return None
    percentage = amount / total_flour_weight * 100
    if not math.isfinite(percentage):
        return None
    return round_to(percentage, places)


def amount_for(percentage, total_flour_weight, places=2):
    """Grams for a baker's percentage; 0 when there is no flour, None on overflow."""
    if total_flour_weight <= 0:
        return 0.0
    amount = percentage / 100 * total_flour_weight
    if not math.isfinite(amount):
        return None
    return round_to(amount, places)
