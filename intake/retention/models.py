from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class RetentionDisposition(str, Enum):
    DELETE_IMMEDIATELY = "DELETE_IMMEDIATELY"
    HOLD_TEMPORARY = "HOLD_TEMPORARY"
    HOLD_PERMANENT = "HOLD_PERMANENT"


_FILE_POLICIES = {
    RetentionDisposition.DELETE_IMMEDIATELY: "immediate",
    RetentionDisposition.HOLD_TEMPORARY: "temporary",
    RetentionDisposition.HOLD_PERMANENT: "permanent",
}


@dataclass(frozen=True)
class RetentionDecision:
    """What happens to the uploaded file.

    ``horizon`` is only set for HOLD_TEMPORARY. ``retain_until`` is ``None``
    for permanent holds and equals the creation time for immediate deletion.
    """

    disposition: RetentionDisposition
    horizon: timedelta | None = None
    retain_until: datetime | None = None

    @property
    def file_policy(self) -> str:
        """Retention label recorded by the storage layer on the file row."""
        return _FILE_POLICIES[self.disposition]
