import logging
from typing import Optional

from retrospace.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the data service or an app hosting the client."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
