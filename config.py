"""
QueueCalc Configuration Settings
"""
import os
import logging

# Application Settings
APP_NAME = "QueueCalc"
VERSION = "1.0.0"

# Display Settings
DEFAULT_DISPLAY = "0"
ERROR_TEXT = "Error"
DIVIDE_BY_ZERO_TEXT = "Error: Div by 0"

# Results are rounded to this many places after the decimal point
RESULT_DECIMAL_PLACES = 10

# Pressing "=" twice re-applies the last operator and right-hand operand
REPEAT_EQUALS = os.environ.get("QUEUECALC_REPEAT_EQUALS", "1") not in ("0", "false", "no")

# History Settings
MAX_HISTORY_ITEMS = 100

# Session Settings (one calculator per browser session)
MAX_SESSIONS = int(os.environ.get("QUEUECALC_MAX_SESSIONS", 256))
SECRET_KEY = os.environ.get("QUEUECALC_SECRET_KEY", "queuecalc-dev-key")

# Web Portal settings
WEB_HOST = os.environ.get("QUEUECALC_HOST", '0.0.0.0')
WEB_PORT = int(os.environ.get("QUEUECALC_PORT", 8888))
WEB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")

# Logging
LOG_LEVEL = getattr(logging, os.environ.get("QUEUECALC_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
