"""Re-running commands that lost a compare-and-set race.

Aggregates are saved against the version they were read at. When another
writer saved first, Protean raises ``ExpectedVersionError`` and the unit of
work rolls back. Running the command again re-reads current state, so the
second attempt either succeeds or fails with the domain error that state
now calls for.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

MAX_ATTEMPTS = 3


def process_with_retry(build_command, attempts=MAX_ATTEMPTS):
    """Process the command from ``build_command()``, rebuilding it for each attempt."""
    for attempt in range(1, attempts + 1):
        command = build_command()
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            if attempt == attempts:
                raise
            logger.warning(
                "Concurrent update detected, retrying",
                command=command.__class__.__name__,
                attempt=attempt,
            )
