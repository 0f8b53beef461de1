"""
Logging helpers for the WooCommerce REST API client.

Functions:
    log_event(event: str, **fields):
        Logs structured events as JSON records on the "woocommerce_rest_api" logger.
        Handlers and levels are left to the application.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import json
import logging


logger = logging.getLogger("woocommerce_rest_api")


def log_event(event: str, level: int = logging.INFO, **fields):
    if not logger.isEnabledFor(level):
        return
    record = {"event": event, **fields}
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))
