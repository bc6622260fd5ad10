"""
Protocols (Interfaces) for Dependency Inversion.

The orchestrator only depends on these, so tests can inject fakes.
"""
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from .models import RawResponse, TransportFailure


@runtime_checkable
class IUploadClient(Protocol):
    """Interface for the HTTP upload endpoint."""

    async def upload(self, path: Path) -> Union[RawResponse, TransportFailure]:
        """POST one file and return the raw reply or a transport failure."""
        ...
