import logging
from typing import Any, Dict, Optional

import requests

import config

logger = logging.getLogger(__name__)


def relay_response(payload: Dict[str, Any], url: Optional[str] = None, timeout: Optional[float] = None) -> bool:
    """POST the finished match response to the downstream webhook.

    Best effort: failures are logged and never raised. Returns True when the
    webhook accepted the payload.
    """
    url = url if url is not None else config.NOTIFY_WEBHOOK_URL
    timeout = timeout if timeout is not None else config.NOTIFY_TIMEOUT
    if not url:
        logger.debug("No webhook URL configured, skipping relay")
        return False

    try:
        r = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Error sending response to webhook %s: %s", url, e)
        return False

    if not r.ok:
        logger.error("Webhook %s rejected response: HTTP %d", url, r.status_code)
        return False
    return True
