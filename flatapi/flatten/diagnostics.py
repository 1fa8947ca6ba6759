"""Warning sink for recoverable conditions met while flattening."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    """Collects recoverable conditions reported during a flattening pass.

    Every message is kept in ``warnings`` and forwarded to ``logger`` so a
    caller can either inspect the pass result or rely on logging output.
    """

    logger: logging.Logger = field(default=logger)
    warnings: list[str] = field(default_factory=list)

    def warning(self, message: str) -> None:
        self.warnings.append(message)
        self.logger.warning(message)
