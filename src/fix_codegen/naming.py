"""Identifier casing for generated Rust code.

Three casings are needed:
  - type case      OrderQty    -> OrderQty     (structs, enums, variants)
  - constant case  OrderQty    -> ORDER_QTY    (field definition constants)
  - member case    OrderQty    -> order_qty    (struct members)

Word boundaries are found at separators, at lower/digit -> upper transitions
and before the last capital of an acronym run, so MDReqID splits into
MD, Req, ID. A trailing plural "s" stays with its acronym (NoPartyIDs ->
No, Party, IDs).
"""

from __future__ import annotations

import re
from typing import FrozenSet, List

# Prefix for identifiers that would otherwise start with a digit.
LEADING_DIGIT_MARKER = "N"

RUST_KEYWORDS: FrozenSet[str] = frozenset({
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "async", "await", "dyn", "abstract", "become", "box", "do", "final",
    "macro", "override", "priv", "typeof", "unsized", "virtual", "yield",
    "try", "gen",
})

# Keywords that cannot be written as raw identifiers.
_NON_RAW_KEYWORDS: FrozenSet[str] = frozenset({"crate", "self", "Self", "super"})


def split_words(name: str) -> List[str]:
    words: List[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", name):
        if not chunk:
            continue
        start = 0
        for i in range(1, len(chunk)):
            prev, cur = chunk[i - 1], chunk[i]
            if not cur.isupper():
                continue
            if prev.islower() or prev.isdigit():
                words.append(chunk[start:i])
                start = i
            elif prev.isupper() and _starts_lower_word(chunk, i + 1):
                words.append(chunk[start:i])
                start = i
        words.append(chunk[start:])
    return words


def _starts_lower_word(chunk: str, pos: int) -> bool:
    """True when a lowercase run at ``pos`` is a real word, not a plural "s"."""
    end = pos
    while end < len(chunk) and chunk[end].islower():
        end += 1
    run = chunk[pos:end]
    return bool(run) and run != "s"


def to_type_case(name: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(name))


def to_constant_case(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


def to_member_case(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def guard_leading_digit(identifier: str, marker: str = LEADING_DIGIT_MARKER) -> str:
    if not identifier or identifier[0].isdigit():
        return marker + identifier
    return identifier


def escape_keyword(identifier: str) -> str:
    if identifier in _NON_RAW_KEYWORDS:
        return identifier + "_"
    if identifier in RUST_KEYWORDS:
        return "r#" + identifier
    return identifier


def type_identifier(name: str) -> str:
    return escape_keyword(guard_leading_digit(to_type_case(name)))


def constant_identifier(name: str) -> str:
    return guard_leading_digit(to_constant_case(name))


def member_identifier(name: str) -> str:
    return escape_keyword(guard_leading_digit(to_member_case(name), marker="_"))


def variant_identifier(description: str) -> str:
    """Enum variant name for a human-readable value description."""
    return type_identifier(description)
