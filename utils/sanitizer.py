"""
Input Sanitization Module

Cleans user supplied text before it is stored or placed in a share token.
Text is returned to clients as JSON, so it is not HTML-escaped here.
"""

import re

from constants import MAX_LENGTHS

# Control characters, excluding tab and newline
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b-\x1f\x7f-\x9f]')
_ALL_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize free text while keeping line breaks.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Normalize line endings, then drop other control characters
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = _CONTROL_CHARS.sub('', text)

    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_recipe_title(title, max_length=None):
    """
    Sanitize a recipe title for storage and display.

    Args:
        title: The recipe title to sanitize
        max_length: Maximum allowed length (default from MAX_LENGTHS)

    Returns:
        Sanitized title, 'Untitled Recipe' when nothing usable is left
    """
    if max_length is None:
        max_length = MAX_LENGTHS['recipe_title']

    if not title:
        return 'Untitled Recipe'

    if not isinstance(title, str):
        title = str(title)

    # Collapse whitespace (including newlines and tabs) before dropping control characters
    title = re.sub(r'\s+', ' ', title)
    title = _ALL_CONTROL_CHARS.sub('', title).strip()

    if len(title) > max_length:
        title = title[:max_length-3] + '...'

    return title or 'Untitled Recipe'


def sanitize_ingredient_name(name, max_length=None):
    """Single-line ingredient name; empty names are allowed (new rows start blank)."""
    if max_length is None:
        max_length = MAX_LENGTHS['ingredient_name']

    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    name = re.sub(r'\s+', ' ', name)
    name = _ALL_CONTROL_CHARS.sub('', name).strip()

    return name[:max_length]


def sanitize_notes(notes):
    return sanitize_text(notes, max_length=MAX_LENGTHS['notes'])


def sanitize_description(description):
    return sanitize_text(description, max_length=MAX_LENGTHS['recipe_description'])
