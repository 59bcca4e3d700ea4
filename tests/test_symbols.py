"""Tests for mapping button text, data-actions and keys to symbols."""

import pytest

from symbols import (
    CLEAR, DECIMAL, EQUALS, Operator, Symbol, SymbolKind, parse_keys, parse_symbol,
)


@pytest.mark.parametrize("token", list("0123456789"))
def test_digits(token):
    assert parse_symbol(token) == Symbol(SymbolKind.DIGIT, token)


@pytest.mark.parametrize("token, op", [
    ("+", Operator.ADD),
    ("add", Operator.ADD),
    ("-", Operator.SUBTRACT),
    ("subtract", Operator.SUBTRACT),
    ("*", Operator.MULTIPLY),
    ("x", Operator.MULTIPLY),
    ("X", Operator.MULTIPLY),
    ("×", Operator.MULTIPLY),
    ("multiply", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
    ("÷", Operator.DIVIDE),
    ("Divide", Operator.DIVIDE),
])
def test_operators(token, op):
    symbol = parse_symbol(token)
    assert symbol.kind == SymbolKind.OPERATOR
    assert symbol.value is op


@pytest.mark.parametrize("token, expected", [
    (".", DECIMAL),
    ("decimal", DECIMAL),
    ("=", EQUALS),
    ("calculate", EQUALS),
    ("\r", EQUALS),
    ("\n", EQUALS),
    ("C", CLEAR),
    ("clear", CLEAR),
    ("Escape", CLEAR),
])
def test_other_symbols(token, expected):
    assert parse_symbol(token) == expected


@pytest.mark.parametrize("token", ["", " ", "12", "%", "sqrt", None, 5])
def test_unknown_tokens_raise_value_error(token):
    with pytest.raises(ValueError):
        parse_symbol(token)


def test_symbol_passes_through():
    symbol = Symbol.operator("add")
    assert parse_symbol(symbol) is symbol


def test_parse_keys_skips_spaces():
    symbols = parse_keys("12 + 3 =")
    assert [str(s) for s in symbols] == ["1", "2", "+", "3", "="]


def test_operator_signs():
    assert [op.sign for op in Operator] == ["+", "-", "×", "÷"]
    assert Operator.ADD.commutative and Operator.MULTIPLY.commutative
    assert not Operator.SUBTRACT.commutative and not Operator.DIVIDE.commutative
