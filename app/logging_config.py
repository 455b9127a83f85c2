# app/logging_config.py
import logging
import os
import sys

logger = logging.getLogger("payment_ledger")
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

# Clear any default handlers
logger.handlers.clear()
logger.propagate = False

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
formatter = logging.Formatter(
    '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)
