"""
Share Token Codec

Turns an ingredient list plus notes into a URL-fragment-safe token and back,
so a recipe can be shared or bookmarked without touching the database.

Flour entries carry their amount and every other entry carries its baker's
percentage. Decoding re-derives the non-flour amounts from the flour total,
so a decoded recipe is consistent without a separate validation pass.

Failures never raise: encoding returns '' and decoding returns None.
"""

import base64
import binascii
import logging
import math

from constants import (
    FIELD_SEPARATOR,
    ENTRY_SEPARATOR,
    NOTES_SEPARATOR,
    FLOUR_FLAG,
    OTHER_FLAG,
    NAME_ESCAPES,
    NOTES_ESCAPES,
    FRAGMENT_PREFIX,
    FLOUR_PERCENTAGE,
    DERIVED_PLACES,
)
from models.draft import RecipeDraft
from models.ingredient import Ingredient
from utils.numbers import parse_strict_float
from .calculations import get_total_flour_weight, amount_for

logger = logging.getLogger(__name__)


class TokenFormatError(ValueError):
    """Raised internally when a token payload cannot be parsed."""
    pass


def _escape(text, escapes):
    for raw, escaped in escapes:
        text = text.replace(raw, escaped)
    return text


def _unescape(text, escapes):
    for raw, escaped in reversed(escapes):
        text = text.replace(escaped, raw)
    return text


def format_number(value):
    """Shortest decimal string for a number: 1000.0 -> '1000', 0.2 -> '0.2'."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"cannot encode {value!r}")
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _encode_entry(ing):
    name = _escape(ing.name or '', NAME_ESCAPES)
    flag = FLOUR_FLAG if ing.is_flour else OTHER_FLAG
    value = ing.amount if ing.is_flour else ing.percentage
    return FIELD_SEPARATOR.join((name, flag, format_number(value)))


def build_payload(ingredients, notes=''):
    """The plain-text payload before base64: entries, then '||' and notes if any."""
    record = ENTRY_SEPARATOR.join(_encode_entry(ing) for ing in ingredients)
    escaped_notes = _escape(notes or '', NOTES_ESCAPES)
    if escaped_notes:
        return f"{record}{NOTES_SEPARATOR}{escaped_notes}"
    return record


def encode_recipe(ingredients, notes=''):
    """
    Encode ingredients and notes as a URL-safe token.

    Returns:
        The token (URL-safe base64 without padding), or '' if encoding failed
    """
    try:
        payload = build_payload(ingredients, notes)
        token = base64.urlsafe_b64encode(payload.encode('utf-8'))
        return token.decode('ascii').rstrip('=')
    except (AttributeError, TypeError, ValueError, OverflowError, UnicodeError) as e:
        logger.warning("Failed to encode recipe: %s", e)
        return ''


def build_share_fragment(ingredients, notes=''):
    """'#<token>' for the document location, or '' if encoding failed."""
    token = encode_recipe(ingredients, notes)
    if not token:
        return ''
    return f"{FRAGMENT_PREFIX}{token}"


def _b64decode(token):
    token = token.strip()
    if token.startswith(FRAGMENT_PREFIX):
        token = token[len(FRAGMENT_PREFIX):]
    # Accept both the URL-safe and the standard alphabet, padded or not
    token = token.replace('-', '+').replace('_', '/')
    token += '=' * (-len(token) % 4)
    return base64.b64decode(token, validate=True).decode('utf-8')


def _parse_entry(entry, position):
    fields = entry.split(FIELD_SEPARATOR)
    if len(fields) != 3:
        raise TokenFormatError(f"entry {position} has {len(fields)} fields")

    raw_name, flag, raw_value = fields
    if flag not in (FLOUR_FLAG, OTHER_FLAG):
        raise TokenFormatError(f"entry {position} has flour flag {flag!r}")

    value = parse_strict_float(raw_value)
    if value is None or value < 0:
        raise TokenFormatError(f"entry {position} has value {raw_value!r}")

    is_flour = flag == FLOUR_FLAG
    return Ingredient(
        id=position,
        name=_unescape(raw_name, NAME_ESCAPES),
        is_flour=is_flour,
        amount=value if is_flour else 0.0,
        percentage=FLOUR_PERCENTAGE if is_flour else value,
    )


def parse_payload(payload):
    """
    Parse a decoded payload into (ingredients, notes).

    Raises:
        TokenFormatError: if an entry is malformed
    """
    record, _, raw_notes = payload.partition(NOTES_SEPARATOR)
    entries = [entry for entry in record.split(ENTRY_SEPARATOR) if entry.strip()]
    ingredients = tuple(_parse_entry(entry, position)
                        for position, entry in enumerate(entries, start=1))

    total_flour = get_total_flour_weight(ingredients)
    if not math.isfinite(total_flour):
        raise TokenFormatError("flour total is too large")

    derived = []
    for ing in ingredients:
        if ing.is_flour:
            derived.append(ing)
            continue
        amount = amount_for(ing.percentage, total_flour, DERIVED_PLACES)
        if amount is None:
            raise TokenFormatError(f"entry {ing.id} amount is too large")
        derived.append(Ingredient(
            id=ing.id,
            name=ing.name,
            is_flour=False,
            amount=amount,
            percentage=ing.percentage,
        ))
    return tuple(derived), _unescape(raw_notes, NOTES_ESCAPES)


def decode_recipe(token):
    """
    Decode a share token (with or without the leading '#').

    Returns:
        RecipeDraft with empty title and description, or None if the token
        is empty or malformed
    """
    if not token or not isinstance(token, str):
        return None

    try:
        payload = _b64decode(token)
        ingredients, notes = parse_payload(payload)
    except (binascii.Error, UnicodeError, ValueError, OverflowError) as e:
        logger.warning("Failed to decode recipe from token: %s", e)
        return None

    return RecipeDraft(notes=notes, ingredients=ingredients)
