# sevasetu/intake/stages.py
from enum import Enum
from typing import Optional


class IntakeStage(str, Enum):
    AWAITING_NAME = "awaiting-name"
    AWAITING_AGE = "awaiting-age"
    AWAITING_PHONE = "awaiting-phone"
    AWAITING_LOCATION = "awaiting-location"
    COMPLETE = "complete"
    INACTIVE = "inactive"

    @property
    def field(self) -> Optional[str]:
        """Profile field this stage is allowed to fill, if any."""
        return _STAGE_FIELDS.get(self)

    @property
    def is_collecting(self) -> bool:
        return self.field is not None


_STAGE_FIELDS = {
    IntakeStage.AWAITING_NAME: "name",
    IntakeStage.AWAITING_AGE: "age",
    IntakeStage.AWAITING_PHONE: "phone",
    IntakeStage.AWAITING_LOCATION: "location",
}
