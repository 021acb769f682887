from __future__ import annotations

import pytest

from sales_dashboard.core.classification import (
    CASSETTE,
    CEILING,
    HIGH_WALL,
    MULTISPLIT,
    NON_EQUIPMENT,
    NOT_INFORMED,
    OTHER_BRANDS,
    Rule,
    RuleKind,
    classify_brand,
    classify_machine_type,
    classify_payment_method,
    first_match,
    is_hvac_equipment,
    rule_matches,
)


def test_gree_high_wall() -> None:
    name = "Ar Condicionado Split Hi-Wall Gree 9000 BTUs"
    assert is_hvac_equipment(name)
    assert classify_brand(name) == "Gree"
    assert classify_machine_type(name) == HIGH_WALL


def test_elgin_is_not_lg() -> None:
    assert classify_brand("Ar Condicionado Split Hi-Wall Elgin 12000 BTUs") == "Elgin"
    assert classify_brand("Split LG Dual Inverter 9000 BTUs") == "LG"


def test_unknown_brand_for_hvac_item() -> None:
    assert classify_brand("Climatizador Portátil XYZ") == OTHER_BRANDS


def test_non_equipment() -> None:
    name = "Cabo PP 3x2,5mm"
    assert not is_hvac_equipment(name)
    assert classify_brand(name) is None
    assert classify_machine_type(name) == NON_EQUIPMENT


def test_bare_number_is_not_equipment() -> None:
    assert not is_hvac_equipment("Kit instalação 10 metros")


def test_btu_unit_marks_equipment() -> None:
    name = "Aparelho Philco 12.000 BTU/h"
    assert is_hvac_equipment(name)
    assert classify_brand(name) == "Philco"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Ar Condicionado Cassete Samsung 36000 BTUs", CASSETTE),
        ("Piso Teto Carrier 60000 BTUs", CEILING),
        ("Multi Split Midea 2x9000 BTUs", MULTISPLIT),
        ("Climatizador Portátil XYZ", HIGH_WALL),
    ],
)
def test_machine_types(name: str, expected: str) -> None:
    assert classify_machine_type(name) == expected


@pytest.mark.parametrize(
    "detail, expected",
    [
        ("Boleto Bancário", "Boleto"),
        ("PIX", "PIX"),
        ("Cartão Visa 3x", "Cartão de Crédito"),
        ("Cartão de débito", "Débito"),
        ("Dinheiro ", "Dinheiro"),
        ("", NOT_INFORMED),
        (None, NOT_INFORMED),
    ],
)
def test_payment_methods(detail, expected: str) -> None:
    assert classify_payment_method(detail) == expected


def test_first_match_respects_order() -> None:
    rules = (
        Rule(RuleKind.CONTAINS, "first", ("ab",)),
        Rule(RuleKind.CONTAINS, "second", ("abc",)),
    )
    assert first_match(rules, "abc") == "first"
    assert first_match(rules, "xyz") is None


def test_contains_not_rule() -> None:
    rule = Rule(RuleKind.CONTAINS_NOT, "LG", ("lg",), excluded=("elgin",))
    assert rule_matches(rule, "split lg")
    assert not rule_matches(rule, "split elgin")
