"""
English singularization used to name list members in XML output.

`<books>` holding a list produces `<book>` children. When a name has no
distinct singular form ("xml", "data", "item") the caller falls back to a
fixed name instead.

The rules are a small English-only heuristic. Callers needing other
languages pass their own strategy to `singular_or_fallback`.
"""

import re
from typing import Callable, Dict, List, Set, Tuple

Singularizer = Callable[[str], str]

DEFAULT_FALLBACK = "item"

UNCOUNTABLE: Set[str] = {
    "audio",
    "data",
    "equipment",
    "feedback",
    "fish",
    "information",
    "metadata",
    "money",
    "news",
    "series",
    "sheep",
    "species",
    "status",
    "xml",
}

IRREGULAR: Dict[str, str] = {
    "children": "child",
    "feet": "foot",
    "geese": "goose",
    "indices": "index",
    "matrices": "matrix",
    "men": "man",
    "mice": "mouse",
    "people": "person",
    "teeth": "tooth",
    "vertices": "vertex",
    "women": "woman",
}

# (pattern, replacement) pairs, first match wins
RULES: List[Tuple[str, str]] = [
    (r"(quiz)zes$", r"\1"),
    (r"(analy|ba|diagno|parenthe|progno|synop|the)ses$", r"\1sis"),
    (r"(cookie|movie|pie|tie)s$", r"\1"),
    (r"([^aeiouy])ies$", r"\1y"),
    (r"(alias|bus|status|virus)es$", r"\1"),
    (r"(ss|x|ch|sh|zz)es$", r"\1"),
    (r"([lr])ves$", r"\1f"),
    (r"(kni|li|wi)ves$", r"\1fe"),
    (r"(buffal|her|potat|tomat|ech)oes$", r"\1o"),
    (r"(shoe|toe)s$", r"\1"),
    (r"(ss|us|is)$", r"\1"),
    (r"s$", r""),
]

_COMPILED = [(re.compile(pattern, re.IGNORECASE), replacement) for pattern, replacement in RULES]


def _match_case(source: str, word: str) -> str:
    if source.isupper():
        return word.upper()
    if source[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def english_singular(word: str) -> str:
    """Return the singular form of an English plural; other words unchanged."""
    if not word:
        return word

    # Only the trailing word changes ("order_lines" -> "order_line")
    match = re.search(r"[A-Za-z]+$", word)
    if match is None:
        return word
    head, tail = word[: match.start()], match.group(0)
    lowered = tail.lower()

    if lowered in UNCOUNTABLE:
        return word
    if lowered in IRREGULAR:
        return head + _match_case(tail, IRREGULAR[lowered])

    for pattern, replacement in _COMPILED:
        if pattern.search(tail):
            singular = pattern.sub(replacement, tail, count=1)
            return head + (singular.upper() if tail.isupper() else singular)
    return word


def singular_or_fallback(
    name: str,
    singularize: Singularizer = english_singular,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """
    Derive an element name for a list member.

    Args:
        name: Name of the containing element (e.g. "books")
        singularize: Strategy mapping a word to its singular form
        fallback: Name used when the singular equals the input

    Returns:
        The singular form when it differs from `name`, otherwise `fallback`
    """
    singular = singularize(name)
    if singular and singular != name:
        return singular
    return fallback
