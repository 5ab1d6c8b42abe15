from typing import Optional
from loguru import logger
from prefix_sums.lib.settings import PrefixSumIndexSettings


def configure_logging(
    settings: Optional[PrefixSumIndexSettings] = None,
) -> Optional[int]:
    """Adds the file sink described by the given settings (defaulting to the
    environment) to the loguru logger.

    Returns:
        the loguru handler id, which can be passed to logger.remove(), or None
        if no log file is configured
    """
    if settings is None:
        settings = PrefixSumIndexSettings.from_environ()

    if settings.log_file is None:
        return None

    return logger.add(settings.log_file, enqueue=True, rotation=settings.log_rotation)
