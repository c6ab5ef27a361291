"""
Compact Token Constants

Delimiters and escape characters for the shareable recipe token.

Token payload layout (before base64):
    name,flag,value|name,flag,value||notes

flag is '1' for flour (value = amount in grams) and '0' for everything
else (value = baker's percentage).
"""

FIELD_SEPARATOR = ','
ENTRY_SEPARATOR = '|'
NOTES_SEPARATOR = '||'

FLOUR_FLAG = '1'
OTHER_FLAG = '0'

# Replacements used inside ingredient names
NAME_ESCAPES = (
    (',', ';'),
    ('|', '/'),
)

# Replacements used inside notes, applied in order
NOTES_ESCAPES = (
    ('||', '%%'),
    ('|', '/'),
)

FRAGMENT_PREFIX = '#'
