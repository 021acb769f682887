"""Brand, machine-type and payment-method tagging from free-text fields.

Every classifier is an ordered table of rules evaluated against the lowercased
text; the first rule that matches decides the label.

A number only marks an item as air-conditioning equipment when a BTU unit
follows it (``12000 BTUs``, ``12k btu``, ``9.000 BTU/h``). Older versions of
the dashboard accepted any number there, which tagged cables and kits as
equipment; keep the unit required.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple


class RuleKind(str, Enum):
    CONTAINS = "contains"          # any of the terms is a substring
    PATTERN = "pattern"            # regex search
    ALL_OF = "all_of"              # every term is a substring
    CONTAINS_NOT = "contains_not"  # any of ``terms`` and none of ``excluded``


class Rule(NamedTuple):
    kind: RuleKind
    label: str
    terms: Tuple[str, ...] = ()
    pattern: Optional[re.Pattern] = None
    excluded: Tuple[str, ...] = ()


def _contains(label: str, *terms: str) -> Rule:
    return Rule(RuleKind.CONTAINS, label, terms)


def _pattern(label: str, regex: str) -> Rule:
    return Rule(RuleKind.PATTERN, label, pattern=re.compile(regex))


def _all_of(label: str, *terms: str) -> Rule:
    return Rule(RuleKind.ALL_OF, label, terms)


def _contains_not(label: str, terms: Iterable[str], excluded: Iterable[str]) -> Rule:
    return Rule(RuleKind.CONTAINS_NOT, label, tuple(terms), excluded=tuple(excluded))


def rule_matches(rule: Rule, text: str) -> bool:
    if rule.kind is RuleKind.CONTAINS:
        return any(term in text for term in rule.terms)
    if rule.kind is RuleKind.PATTERN:
        return rule.pattern.search(text) is not None
    if rule.kind is RuleKind.ALL_OF:
        return all(term in text for term in rule.terms)
    if rule.kind is RuleKind.CONTAINS_NOT:
        return any(term in text for term in rule.terms) and not any(
            term in text for term in rule.excluded
        )
    raise ValueError(f"Unknown rule kind: {rule.kind!r}")


def first_match(rules: Sequence[Rule], text: str) -> Optional[str]:
    """Label of the first rule in ``rules`` that matches ``text``."""
    for rule in rules:
        if rule_matches(rule, text):
            return rule.label
    return None


# --- HVAC equipment ---

HVAC = "hvac"

HVAC_RULES: Tuple[Rule, ...] = (
    _contains(
        HVAC,
        "split",
        "condicionado",
        "ar-condicionado",
        "cassete",
        "evaporadora",
        "condensadora",
        "hi-wall",
        "hiwall",
        "climatizador",
    ),
    _pattern(HVAC, r"\bbtus?\b|btu/h"),
    _pattern(HVAC, r"\b\d+(?:[.,]\d+)?\s*k?\s*btu"),
)


def _lower(item_name: object) -> str:
    return item_name.lower().strip() if isinstance(item_name, str) else ""


def is_hvac_equipment(item_name: object) -> bool:
    """Whether the item name describes an air-conditioning unit."""
    text = _lower(item_name)
    return bool(text) and first_match(HVAC_RULES, text) is not None


# --- Brands ---

BRANDS: Tuple[str, ...] = (
    "Gree",
    "Hisense",
    "Philco",
    "Electrolux",
    "Midea",
    "Springer",
    "Carrier",
    "Samsung",
    "LG",
    "Elgin",
)
OTHER_BRANDS = "Outras Marcas"


def _brand_rules() -> Tuple[Rule, ...]:
    rules = []
    for brand in BRANDS:
        if brand == "LG":
            # "elgin" contains "lg"
            rules.append(_contains_not(brand, ["lg"], ["elgin"]))
        else:
            rules.append(_contains(brand, brand.lower()))
    return tuple(rules)


BRAND_RULES = _brand_rules()


def classify_brand(item_name: object) -> Optional[str]:
    """Brand tag for HVAC items, :data:`OTHER_BRANDS` when none is known.

    Returns ``None`` for items that are not air-conditioning equipment.
    """
    if not is_hvac_equipment(item_name):
        return None
    return first_match(BRAND_RULES, _lower(item_name)) or OTHER_BRANDS


# --- Machine types ---

HIGH_WALL = "High-Wall"
CASSETTE = "Cassete"
CEILING = "Teto"
MULTISPLIT = "Multisplit"
NON_EQUIPMENT = "Outros"
MACHINE_TYPES = (HIGH_WALL, CASSETTE, CEILING, MULTISPLIT)

MACHINE_TYPE_RULES: Tuple[Rule, ...] = (
    _contains(HIGH_WALL, "hi-wall", "hi wall", "hiwall"),
    _all_of(HIGH_WALL, "split", "parede"),
    _all_of(HIGH_WALL, "split", "wall"),
    _pattern(HIGH_WALL, r"\bhigh[\s-]?wall\b"),
    _pattern(CASSETTE, r"\bcassete\b|\bk7\b"),
    _contains(CASSETTE, "cassette"),
    _all_of(CASSETTE, "teto", "embutir"),
    _contains_not(CEILING, ["teto"], ["cassete", "embutir"]),
    _contains(CEILING, "ceiling"),
    _pattern(CEILING, r"\bpiso[\s-]?teto\b"),
    _contains(MULTISPLIT, "multisplit", "multi-split", "multi split"),
    _all_of(MULTISPLIT, "multi", "split"),
    _all_of(MULTISPLIT, "multi", "evaporadora"),
    _all_of(MULTISPLIT, "multi", "condensadora"),
    _contains_not(HIGH_WALL, ["split"], ["multi", "cassete", "teto"]),
)


def classify_machine_type(item_name: object) -> str:
    """One of :data:`MACHINE_TYPES`, or :data:`NON_EQUIPMENT`."""
    if not is_hvac_equipment(item_name):
        return NON_EQUIPMENT
    return first_match(MACHINE_TYPE_RULES, _lower(item_name)) or HIGH_WALL


# --- Payment methods ---

BOLETO = "Boleto"
PIX = "PIX"
CREDIT_CARD = "Cartão de Crédito"
DEBIT = "Débito"
NOT_INFORMED = "Não informado"

PAYMENT_RULES: Tuple[Rule, ...] = (
    _contains(BOLETO, "boleto"),
    _contains(PIX, "pix"),
    _contains(CREDIT_CARD, "visa", "mastercard", "elo", "amex", "crédito", "credito"),
    _contains(DEBIT, "débito", "debito"),
)


def classify_payment_method(detail: object) -> str:
    """Payment method bucket; unknown methods keep their own text."""
    text = detail.strip() if isinstance(detail, str) else ""
    if not text:
        return NOT_INFORMED
    return first_match(PAYMENT_RULES, text.lower()) or text
