from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

BackendOperation = Literal[
    "register_guardian",
    "find_guardian",
    "register_baby",
    "create_appointment",
    "list_appointments",
    "update_appointment",
    "delete_appointment",
]
BackendStatus = Literal["success", "not_found", "failed"]


@dataclass(frozen=True)
class BackendRequest:
    """Description of one backend call. Flows build these; the engine executes them."""

    operation: BackendOperation
    payload: Dict[str, Any] = field(default_factory=dict)   # body or lookup key
    resource_id: Optional[Union[int, str]] = None            # appointment id for PUT/DELETE


@dataclass
class BackendResponse:
    status: BackendStatus
    data: Any = None
    status_code: Optional[int] = None
    error: Optional[str] = None        # backend body text (JSON or plain) when status=="failed"

    @property
    def ok(self) -> bool:
        return self.status == "success"
