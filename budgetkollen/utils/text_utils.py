"""Text utilities"""

import unicodedata

# å, ä, ö sort after z in the Swedish alphabet
_SWEDISH_LETTERS = {"å": "{", "ä": "|", "ö": "}"}


def swedish_sort_key(name: str) -> str:
    """Collation key approximating Swedish alphabetical order (å < ä < ö after z)"""
    key = []
    for char in unicodedata.normalize("NFC", name).casefold():
        if char in _SWEDISH_LETTERS:
            key.append(_SWEDISH_LETTERS[char])
        else:
            # Other accented letters sort as their base letter (é -> e)
            decomposed = unicodedata.normalize("NFD", char)
            key.append(decomposed[0])
    return "".join(key)
