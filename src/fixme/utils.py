"""Environment-driven defaults"""

import logging
import os


logger = logging.getLogger(__name__)

ENV_DEFAULTS = {
    'FIXME_LINE_LENGTH_LIMIT': 1000,
    'FIXME_MAX_WORKERS': os.cpu_count() or 1,
}


def get_int_env(name: str) -> int:
    """Read an integer setting from the environment.

    Falls back to the value in ENV_DEFAULTS when the variable is unset,
    not an integer, or not positive.
    """
    default = ENV_DEFAULTS[name]
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (ValueError, TypeError):
        logger.warning(f'Invalid {name} value {raw!r}, using default {default}')
        return default
    if value < 1:
        logger.warning(f'{name} must be positive, using default {default}')
        return default
    return value
