"""
In-memory backend for local runs and tests.

Behaves like the development mock API: seeded guardians, sequential ids,
and a 400 on a baby without guardian_id or first_name. Every call is
recorded in `calls` so tests can assert on what was submitted.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from .base import BackendAPI
from .types import BackendResponse

SEED_GUARDIANS = [
    {
        "id": 101,
        "name": "Cyrus Ngugi",
        "national_id": "12345678",
        "whatsapp_number": "254712345678",
    },
    {
        "id": 102,
        "name": "Jane Wanjiru",
        "national_id": "87654321",
        "whatsapp_number": "254700112233",
    },
]


class StubBackendAPI(BackendAPI):
    """
    Deterministic fake backend.

    Properties:
    - Stores records in plain lists
    - fail_operations: operation names that answer with a 500
    """

    def __init__(
        self,
        guardians: Optional[List[Dict[str, Any]]] = None,
        fail_operations: Optional[Set[str]] = None,
    ):
        self.guardians = copy.deepcopy(SEED_GUARDIANS if guardians is None else guardians)
        self.babies: List[Dict[str, Any]] = []
        self.appointments: List[Dict[str, Any]] = []
        self.fail_operations = set(fail_operations or ())
        self.calls: List[Tuple[str, Any]] = []

    def _failure(self, operation: str) -> Optional[BackendResponse]:
        if operation in self.fail_operations:
            return BackendResponse(
                status="failed",
                status_code=500,
                error='{"message":"Internal Server Error"}',
            )
        return None

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    async def register_guardian(self, payload: Dict[str, Any]) -> BackendResponse:
        self.calls.append(("register_guardian", payload))
        failure = self._failure("register_guardian")
        if failure:
            return failure

        record = {"id": 101 + len(self.guardians), **payload, "created_at": self._now()}
        self.guardians.append(record)
        return BackendResponse(status="success", status_code=201, data={"guardian": record})

    async def find_guardian(self, national_id: str) -> BackendResponse:
        self.calls.append(("find_guardian", national_id))
        failure = self._failure("find_guardian")
        if failure:
            return failure

        for guardian in self.guardians:
            if str(guardian.get("national_id")) == national_id:
                return BackendResponse(status="success", status_code=200, data=guardian)
        return BackendResponse(status="not_found", status_code=200)

    async def register_baby(self, payload: Dict[str, Any]) -> BackendResponse:
        self.calls.append(("register_baby", payload))
        failure = self._failure("register_baby")
        if failure:
            return failure

        if not payload.get("guardian_id") or not payload.get("first_name"):
            return BackendResponse(
                status="failed",
                status_code=400,
                error='{"error":"Missing required fields (guardian_id or first_name)."}',
            )

        record = {"id": 501 + len(self.babies), **payload, "created_at": self._now()}
        self.babies.append(record)
        return BackendResponse(
            status="success",
            status_code=201,
            data={
                "message": "Baby successfully registered and schedule initiated.",
                "baby": record,
            },
        )

    async def create_appointment(self, payload: Dict[str, Any]) -> BackendResponse:
        self.calls.append(("create_appointment", payload))
        failure = self._failure("create_appointment")
        if failure:
            return failure

        record = {"id": 901 + len(self.appointments), **payload}
        self.appointments.append(record)
        return BackendResponse(status="success", status_code=201, data={"appointment": record})

    async def list_appointments(self, baby_id: Union[int, str]) -> BackendResponse:
        self.calls.append(("list_appointments", baby_id))
        failure = self._failure("list_appointments")
        if failure:
            return failure

        found = [a for a in self.appointments if str(a.get("baby_id")) == str(baby_id)]
        if not found:
            return BackendResponse(status="not_found", status_code=200)
        return BackendResponse(status="success", status_code=200, data=copy.deepcopy(found))

    def _find_appointment(self, appointment_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        for appointment in self.appointments:
            if str(appointment["id"]) == str(appointment_id):
                return appointment
        return None

    async def update_appointment(
        self, appointment_id: Union[int, str], payload: Dict[str, Any]
    ) -> BackendResponse:
        self.calls.append(("update_appointment", (appointment_id, payload)))
        failure = self._failure("update_appointment")
        if failure:
            return failure

        appointment = self._find_appointment(appointment_id)
        if appointment is None:
            return BackendResponse(
                status="failed", status_code=404, error='{"message":"Appointment not found."}'
            )
        appointment.update(payload)
        return BackendResponse(status="success", status_code=200, data={"appointment": appointment})

    async def delete_appointment(self, appointment_id: Union[int, str]) -> BackendResponse:
        self.calls.append(("delete_appointment", appointment_id))
        failure = self._failure("delete_appointment")
        if failure:
            return failure

        appointment = self._find_appointment(appointment_id)
        if appointment is None:
            return BackendResponse(
                status="failed", status_code=404, error='{"message":"Appointment not found."}'
            )
        self.appointments.remove(appointment)
        return BackendResponse(status="success", status_code=204)
