"""
Symbol Vocabulary for QueueCalc
Maps button text, button data-actions and keyboard keys to calculator symbols
"""
from enum import Enum
from typing import NamedTuple, Optional


class Operator(str, Enum):
    """Binary operators, named after the button data-actions"""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def sign(self):
        return _SIGNS[self]

    @property
    def commutative(self):
        return self in (Operator.ADD, Operator.MULTIPLY)


_SIGNS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


class SymbolKind(str, Enum):
    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"


class Symbol(NamedTuple):
    """One input delivered by a UI adapter"""

    kind: SymbolKind
    value: Optional[object] = None

    @classmethod
    def digit(cls, d):
        d = str(d)
        if len(d) != 1 or d not in "0123456789":
            raise ValueError(f"Not a digit: {d!r}")
        return cls(SymbolKind.DIGIT, d)

    @classmethod
    def operator(cls, op):
        return cls(SymbolKind.OPERATOR, Operator(op))

    def __str__(self):
        if self.kind == SymbolKind.DIGIT:
            return self.value
        if self.kind == SymbolKind.OPERATOR:
            return self.value.sign
        return _KIND_TEXT[self.kind]


DECIMAL = Symbol(SymbolKind.DECIMAL)
EQUALS = Symbol(SymbolKind.EQUALS)
CLEAR = Symbol(SymbolKind.CLEAR)

_KIND_TEXT = {
    SymbolKind.DECIMAL: ".",
    SymbolKind.EQUALS: "=",
    SymbolKind.CLEAR: "C",
}

# Button text, data-action names and keyboard keys
_TOKENS = {
    ".": DECIMAL,
    "decimal": DECIMAL,
    "+": Symbol.operator(Operator.ADD),
    "add": Symbol.operator(Operator.ADD),
    "-": Symbol.operator(Operator.SUBTRACT),
    "subtract": Symbol.operator(Operator.SUBTRACT),
    "*": Symbol.operator(Operator.MULTIPLY),
    "x": Symbol.operator(Operator.MULTIPLY),
    "×": Symbol.operator(Operator.MULTIPLY),
    "multiply": Symbol.operator(Operator.MULTIPLY),
    "/": Symbol.operator(Operator.DIVIDE),
    "÷": Symbol.operator(Operator.DIVIDE),
    "divide": Symbol.operator(Operator.DIVIDE),
    "=": EQUALS,
    "\r": EQUALS,
    "\n": EQUALS,
    "enter": EQUALS,
    "equals": EQUALS,
    "calculate": EQUALS,
    "c": CLEAR,
    "ac": CLEAR,
    "clear": CLEAR,
    "escape": CLEAR,
}


def parse_symbol(token):
    """Convert a token (button text, data-action or key) into a Symbol"""
    if isinstance(token, Symbol):
        return token
    if not isinstance(token, str) or not token:
        raise ValueError(f"Unknown symbol: {token!r}")
    if token in "0123456789" and len(token) == 1:
        return Symbol.digit(token)
    # Keep "\r"/"\n" intact, only trim surrounding spaces from named tokens
    key = token if token.isspace() else token.strip().lower()
    try:
        return _TOKENS[key]
    except KeyError:
        raise ValueError(f"Unknown symbol: {token!r}") from None


def parse_keys(keys):
    """Convert a key stream such as "12+3=" into a list of Symbols, skipping spaces"""
    return [parse_symbol(key) for key in keys if key not in (" ", "\t")]
