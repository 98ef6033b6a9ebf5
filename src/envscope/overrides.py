"""Process-setting overrides on top of file properties.

Overrides narrow, never extend: a setting only replaces the value of a key
the files already define, so process settings cannot become a second place
where properties are declared.
"""

from typing import Dict, Mapping, Optional

from envscope.logger import Logger, get_logger


def apply_overrides(
    base: Mapping[str, str],
    settings: Mapping[str, str],
    logger: Optional[Logger] = None,
) -> Dict[str, str]:
    """Return a copy of ``base`` with matching process settings applied.

    Args:
        base: Merged file properties (not modified)
        settings: Process-level settings
        logger: Logger for applied/ignored keys

    Returns:
        New mapping with the same keys as ``base``
    """
    logger = logger or get_logger()
    result = dict(base)
    for key in base:
        if key in settings:
            result[key] = str(settings[key])
            # Values may be secrets, so only the key is logged
            logger.info("Property overridden by process setting", key=key)
    return result


__all__ = ["apply_overrides"]
