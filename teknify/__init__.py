"""
teknify - concurrent multipart uploads to a single HTTP upload endpoint.

Usage:
    import asyncio
    from pathlib import Path
    from teknify import OutputPresenter, UploadConfig, run_batch

    config = UploadConfig(files=(Path("a.png"), Path("b.png")), concurrency=2)
    outcomes = asyncio.run(run_batch(config, presenter=OutputPresenter()))

    # With an explicit client
    async with HTTPUploadClient(config.endpoint) as client:
        orchestrator = UploadOrchestrator(client, config)
        outcomes = await orchestrator.run_batch()
"""
from .models import (
    DEFAULT_ENDPOINT,
    OutcomeKind,
    OutputMode,
    RawResponse,
    Reply,
    TaskOutcome,
    TransportFailure,
    UploadConfig,
    UploadRequest,
)
from .orchestrator import UploadOrchestrator, UploadTask, run_batch
from .presenter import OutputPresenter
from .services import HTTPUploadClient, interpret

__version__ = "0.1.0"
__all__ = [
    # Main
    "UploadOrchestrator",
    "UploadTask",
    "run_batch",
    # Models
    "DEFAULT_ENDPOINT",
    "OutcomeKind",
    "OutputMode",
    "RawResponse",
    "Reply",
    "TaskOutcome",
    "TransportFailure",
    "UploadConfig",
    "UploadRequest",
    # Services
    "HTTPUploadClient",
    "OutputPresenter",
    "interpret",
]
