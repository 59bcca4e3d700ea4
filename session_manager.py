"""
Session Manager for QueueCalc
Gives every browser session its own calculator and serialises symbol delivery
"""
import logging
import threading
import uuid
from collections import OrderedDict

import config
from calculator import Calculator
from history_manager import HistoryManager
from symbols import parse_keys, parse_symbol

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, max_sessions=config.MAX_SESSIONS, repeat_equals=config.REPEAT_EQUALS):
        self.max_sessions = max_sessions
        self.repeat_equals = repeat_equals
        self._calculators = OrderedDict()
        # Flask serves requests on several threads; one delivery at a time
        self._lock = threading.RLock()

    @staticmethod
    def new_session_id():
        return uuid.uuid4().hex

    def get_calculator(self, session_id):
        """Get the calculator for a session, creating it on first use"""
        with self._lock:
            calculator = self._calculators.get(session_id)
            if calculator is None:
                calculator = Calculator(history=HistoryManager(), repeat_equals=self.repeat_equals)
                self._calculators[session_id] = calculator
                logger.debug("Created calculator for session %s", session_id)
                while len(self._calculators) > self.max_sessions:
                    evicted, _ = self._calculators.popitem(last=False)
                    logger.info("Evicted calculator for session %s", evicted)
            else:
                self._calculators.move_to_end(session_id)
            return calculator

    def deliver(self, session_id, token):
        """Deliver one symbol and report the resulting display"""
        return self.deliver_keys(session_id, [token])

    def deliver_keys(self, session_id, tokens):
        """
        Deliver several symbols in order.

        Every token is parsed before the first delivery, so an unknown token
        raises ValueError without touching the calculator.
        """
        symbols = parse_keys(tokens) if isinstance(tokens, str) else [parse_symbol(t) for t in tokens]
        with self._lock:
            calculator = self.get_calculator(session_id)
            rendered = []
            calculator.on_display_changed = rendered.append
            try:
                calculator.deliver_all(symbols)
            finally:
                calculator.on_display_changed = None
            return {
                'display': calculator.display,
                'changed': bool(rendered),
                'rendered': rendered,
                'error': calculator.is_error,
            }

    def get_display(self, session_id):
        with self._lock:
            return self.get_calculator(session_id).display

    def get_history(self, session_id, limit=50):
        with self._lock:
            history = self.get_calculator(session_id).history
            return history.get_calculation_history(limit)

    def clear_history(self, session_id):
        with self._lock:
            self.get_calculator(session_id).history.clear_calculation_history()

    def __len__(self):
        return len(self._calculators)

    def __contains__(self, session_id):
        return session_id in self._calculators
