from .base import BackendAPI
from .rest import RestBackendAPI
from .stub import StubBackendAPI
from .types import BackendOperation, BackendRequest, BackendResponse, BackendStatus

__all__ = [
    "BackendAPI",
    "RestBackendAPI",
    "StubBackendAPI",
    "BackendRequest",
    "BackendResponse",
    "BackendOperation",
    "BackendStatus",
]
