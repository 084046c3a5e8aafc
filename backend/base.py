from abc import ABC, abstractmethod
from typing import Any, Dict, Union

from .types import BackendRequest, BackendResponse


class BackendAPI(ABC):
    """
    Abstract boundary to the remote guardian/baby/appointment API.
    Flow code must depend ONLY on this interface.

    Operations never raise: transport errors and non-2xx answers come
    back as BackendResponse(status="failed").
    """

    async def execute(self, request: BackendRequest) -> BackendResponse:
        """Run the operation a BackendRequest describes."""
        op = request.operation
        if op == "register_guardian":
            return await self.register_guardian(request.payload)
        if op == "find_guardian":
            return await self.find_guardian(request.payload["national_id"])
        if op == "register_baby":
            return await self.register_baby(request.payload)
        if op == "create_appointment":
            return await self.create_appointment(request.payload)
        if op == "list_appointments":
            return await self.list_appointments(request.payload["baby_id"])
        if op == "update_appointment":
            return await self.update_appointment(request.resource_id, request.payload)
        if op == "delete_appointment":
            return await self.delete_appointment(request.resource_id)
        return BackendResponse(status="failed", error=f"Unknown backend operation: {op}")

    @abstractmethod
    async def register_guardian(self, payload: Dict[str, Any]) -> BackendResponse:
        raise NotImplementedError

    @abstractmethod
    async def find_guardian(self, national_id: str) -> BackendResponse:
        """Resolve a national ID to a guardian record. status="not_found" when none matches."""
        raise NotImplementedError

    @abstractmethod
    async def register_baby(self, payload: Dict[str, Any]) -> BackendResponse:
        raise NotImplementedError

    @abstractmethod
    async def create_appointment(self, payload: Dict[str, Any]) -> BackendResponse:
        raise NotImplementedError

    @abstractmethod
    async def list_appointments(self, baby_id: Union[int, str]) -> BackendResponse:
        """All appointments of one baby as a list. status="not_found" when empty."""
        raise NotImplementedError

    @abstractmethod
    async def update_appointment(
        self, appointment_id: Union[int, str], payload: Dict[str, Any]
    ) -> BackendResponse:
        raise NotImplementedError

    @abstractmethod
    async def delete_appointment(self, appointment_id: Union[int, str]) -> BackendResponse:
        raise NotImplementedError
