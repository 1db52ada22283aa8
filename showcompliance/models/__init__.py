from showcompliance.models.checklist import (
    ChecklistItem,
    ChecklistStatus,
    ExpiryState,
    Phase,
    Urgency,
)
from showcompliance.models.show import Show, ShowJudge, ShowStatus, ShowType
from showcompliance.models.signal import AutomationSignal
from showcompliance.models.upload import FileUpload

__all__ = [
    "AutomationSignal",
    "ChecklistItem",
    "ChecklistStatus",
    "ExpiryState",
    "FileUpload",
    "Phase",
    "Show",
    "ShowJudge",
    "ShowStatus",
    "ShowType",
    "Urgency",
]
