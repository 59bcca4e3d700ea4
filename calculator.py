"""
Calculator Engine for QueueCalc
Evaluates a symbol stream strictly left to right, one button press at a time
"""
import logging
import operator
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, getcontext

import config
from history_manager import HistoryManager
from structures import Queue, Stack
from symbols import Operator, Symbol, SymbolKind, DECIMAL, EQUALS, CLEAR, parse_symbol

logger = logging.getLogger(__name__)

_APPLY = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
}


class CalculatorError(Exception):
    """Recoverable evaluation error, shown on the display instead of a number"""
    display_text = config.ERROR_TEXT


class DivisionByZero(CalculatorError):
    display_text = config.DIVIDE_BY_ZERO_TEXT


class MalformedDisplay(CalculatorError):
    pass


def parse_operand(text):
    """Parse display text into an exact Decimal operand"""
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise MalformedDisplay(f"Display is not a number: {text!r}") from None
    if not value.is_finite():
        raise MalformedDisplay(f"Display is not a finite number: {text!r}")
    return value


def format_number(value, places=config.RESULT_DECIMAL_PLACES):
    """
    Render a Decimal for the display.

    Integral values print without a fractional part, others are rounded
    half-even to `places` and lose their trailing zeros. Never uses exponent
    notation.
    """
    if value.is_zero():
        return "0"
    if value == value.to_integral_value():
        return format(value.to_integral_value(), "f")

    # quantize() fails once the rounded coefficient outgrows the context
    places = min(places, max(0, getcontext().prec - value.adjusted() - 1))
    rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)
    if rounded.is_zero():
        return "0"
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Calculator:
    """
    Sequential evaluation engine behind the button grid.

    State:
        - display: text currently shown, never empty, at most one "."
        - operand queue: values committed since the last reduction
        - operator queue: the single pending operator
        - last symbol kind: decides whether a digit continues or replaces
          the display and how an operator press is interpreted

    A reduction collapses the operand queue under the pending operator,
    shows the result and keeps it as the running value, so 2 + 3 + 4
    evaluates as (2 + 3) + 4. There is no operator precedence.

    on_display_changed(text) is called once for every delivered symbol
    that changes the display.
    """

    def __init__(self, on_display_changed=None, history=None, repeat_equals=config.REPEAT_EQUALS):
        self.on_display_changed = on_display_changed
        self.history = history if history is not None else HistoryManager()
        self.repeat_equals = repeat_equals

        self._operands = Queue()
        self._operators = Queue()
        self._display = config.DEFAULT_DISPLAY
        self._last_kind = None
        self._error = False

        # Last applied operator and right-hand operand, for repeat-equals
        self._last_operator = None
        self._last_operand = None

    @property
    def display(self):
        return self._display

    @property
    def last_kind(self):
        return self._last_kind

    @property
    def pending_operator(self):
        return self._operators.peek()

    @property
    def operands(self):
        return tuple(self._operands)

    @property
    def is_error(self):
        return self._error

    # ── Symbol delivery ─────────────────────────────────────────

    def deliver(self, symbol):
        """Handle one symbol to completion and return the display text"""
        symbol = parse_symbol(symbol)
        before = self._display
        logger.debug("Deliver %s (display=%r, operands: %s)", symbol, before, self._operands.contents())

        try:
            if symbol.kind == SymbolKind.DIGIT:
                self._on_digit(symbol.value)
            elif symbol.kind == SymbolKind.DECIMAL:
                self._on_decimal()
            elif symbol.kind == SymbolKind.OPERATOR:
                self._on_operator(symbol.value)
            elif symbol.kind == SymbolKind.EQUALS:
                self._on_equals()
            else:
                self._on_clear()
        except CalculatorError as exc:
            self._enter_error_state(exc)

        if symbol.kind == SymbolKind.CLEAR:
            self._last_kind = None
        elif symbol.kind == SymbolKind.DECIMAL:
            self._last_kind = SymbolKind.DIGIT
        else:
            self._last_kind = symbol.kind

        if self._display != before and self.on_display_changed is not None:
            self.on_display_changed(self._display)
        return self._display

    def deliver_all(self, symbols):
        """Deliver symbols in order and return the final display text"""
        for symbol in symbols:
            self.deliver(symbol)
        return self._display

    def press_digit(self, digit):
        return self.deliver(Symbol.digit(digit))

    def press_decimal(self):
        return self.deliver(DECIMAL)

    def press_operator(self, op):
        return self.deliver(Symbol.operator(op))

    def press_equals(self):
        return self.deliver(EQUALS)

    def press_clear(self):
        return self.deliver(CLEAR)

    # ── Handlers ────────────────────────────────────────────────

    def _on_digit(self, digit):
        if self._error or self._last_kind == SymbolKind.EQUALS:
            self._start_new_entry()
            self._display = digit
        elif self._display == config.DEFAULT_DISPLAY or self._last_kind == SymbolKind.OPERATOR:
            self._display = digit
        else:
            self._display += digit

    def _on_decimal(self):
        if self._error or self._last_kind == SymbolKind.EQUALS:
            self._start_new_entry()
            self._display = "0."
        elif self._last_kind == SymbolKind.OPERATOR:
            self._display = "0."
        elif "." not in self._display:
            self._display += "."

    def _on_operator(self, op):
        if self._error:
            logger.debug("Ignoring %s while in error state", op.value)
            return

        pending = self._operators.peek()
        if self._last_kind == SymbolKind.OPERATOR:
            if op != pending:
                # Operator switch, the committed operand stays
                logger.debug("Switching operator %s -> %s", pending, op.value)
            else:
                self._reduce_buffer(pending)
            self._set_pending(op)
            return

        # After "=" the result is already the running value
        if self._last_kind != SymbolKind.EQUALS or self._operands.is_empty():
            self._commit_display()
        if self._operands.length() >= 2:
            self._reduce_buffer(pending)
        self._set_pending(op)

    def _on_equals(self):
        if self._error:
            return

        if self._last_kind == SymbolKind.EQUALS:
            if self.repeat_equals and self._last_operator is not None and not self._operands.is_empty():
                self._operands.enqueue(self._last_operand)
                self._reduce_buffer(self._last_operator)
            return

        pending = self._operators.peek()
        if pending is None:
            # Nothing to apply, the display becomes the running value
            self._operands.clear()
            self._commit_display()
            self._last_operator = None
            self._last_operand = None
            return

        self._commit_display()
        self._reduce_buffer(pending)

    def _on_clear(self):
        self._operands.clear()
        self._operators.clear()
        self._display = config.DEFAULT_DISPLAY
        self._error = False
        self._last_operator = None
        self._last_operand = None

    # ── Buffers and reduction ───────────────────────────────────

    def _commit_display(self):
        value = parse_operand(self._display)
        self._operands.enqueue(value)
        return value

    def _set_pending(self, op):
        self._operators.clear()
        self._operators.enqueue(op)

    def _start_new_entry(self):
        """Discard the running value before typing a new number"""
        self._operands.clear()
        self._operators.clear()
        self._error = False

    def _reduce_buffer(self, op):
        """Collapse the operand queue under op and keep the result as the running value"""
        if op is None or self._operands.length() < 2:
            return None

        operands = tuple(self._operands)
        right = operands[-1]
        expression = f" {op.sign} ".join(format_number(value) for value in operands)

        try:
            result = self._reduce(op)
        except DivisionByZero as exc:
            self.history.add_calculation(expression, exc.display_text)
            raise

        self._display = format_number(result)
        self._operands.enqueue(result)
        self._operators.clear()
        self._last_operator = op
        self._last_operand = right

        logger.info("%s = %s", expression, self._display)
        self.history.add_calculation(expression, self._display)
        return result

    def _reduce(self, op):
        """
        Apply op across every buffered operand in encounter order.

        Operands are drained from the queue onto a stack and the stack is
        reversed, so the first operand typed is popped first and becomes the
        running result. Subtraction and division need that order; addition and
        multiplication get the same one.
        """
        operands = Stack()
        while not self._operands.is_empty():
            operands.push(self._operands.dequeue())
        operands.reverse()

        apply = _APPLY[op]
        result = operands.pop()
        while not operands.is_empty():
            if op == Operator.DIVIDE and operands.peek() == 0:
                operands.clear()
                raise DivisionByZero(f"Cannot divide {format_number(result)} by zero")
            result = apply(result, operands.pop())
        return result

    def _enter_error_state(self, exc):
        logger.warning("Calculation error: %s", exc)
        self._operands.clear()
        self._operators.clear()
        self._last_operator = None
        self._last_operand = None
        self._error = True
        self._display = exc.display_text
