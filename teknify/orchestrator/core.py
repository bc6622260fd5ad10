"""Core orchestrator - runs a batch of uploads through a bounded pool."""
import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..models import TaskOutcome, UploadConfig, UploadRequest
from ..protocols import IUploadClient
from ..services.api_client import HTTPUploadClient
from ..utils.events import TASK_COMPLETE, TASK_START, EventEmitter
from .task import UploadTask

if TYPE_CHECKING:
    from ..presenter import OutputPresenter

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """
    Uploads a batch of files with at most ``config.concurrency`` in flight.

    One asyncio task is created per file in input order; each waits on a
    shared semaphore before it starts running, so the (N+1)-th file is
    queued until a slot frees. Outcomes are collected in completion order.

    Events:
        task_start(request)     a file entered the running state
        task_complete(outcome)  an outcome was collected

    Usage:
        async with HTTPUploadClient(config.endpoint) as client:
            orchestrator = UploadOrchestrator(client, config)
            orchestrator.events.on(TASK_COMPLETE, presenter.present)
            outcomes = await orchestrator.run_batch()
    """

    def __init__(
        self,
        client: IUploadClient,
        config: UploadConfig,
        events: Optional[EventEmitter] = None,
    ):
        self._config = config
        self._task = UploadTask(client, config.output_mode)
        self._events = events or EventEmitter()
        self._running = 0
        self.peak_running = 0

    @property
    def events(self) -> EventEmitter:
        return self._events

    async def run_batch(self, files: Optional[Iterable[Path]] = None) -> List[TaskOutcome]:
        """
        Upload every file and return one outcome per file.

        Args:
            files: Paths to upload; defaults to ``config.files``

        Returns:
            Outcomes in completion order, not input order
        """
        paths = list(self._config.files if files is None else files)
        requests = [UploadRequest(Path(p), seq) for seq, p in enumerate(paths)]
        semaphore = asyncio.Semaphore(self._config.concurrency)
        self._running = 0
        self.peak_running = 0

        logger.info(
            f"Starting upload: {len(requests)} files, "
            f"max {self._config.concurrency} parallel"
        )

        tasks = [
            asyncio.create_task(self._run_one(request, semaphore))
            for request in requests
        ]

        outcomes: List[TaskOutcome] = []
        try:
            for next_done in asyncio.as_completed(tasks):
                outcome = await next_done
                outcomes.append(outcome)
                await self._events.emit(TASK_COMPLETE, outcome)
        except asyncio.CancelledError:
            logger.info("Upload cancelled")
            await self._cancel_remaining_tasks(tasks)
            raise

        failed = sum(1 for o in outcomes if not o.success)
        logger.info(f"Uploads complete: {len(outcomes) - failed} successful, {failed} failed")
        return outcomes

    async def _run_one(self, request: UploadRequest, semaphore: asyncio.Semaphore) -> TaskOutcome:
        async with semaphore:
            self._running += 1
            self.peak_running = max(self.peak_running, self._running)
            try:
                logger.debug(f"[{request.sequence_id + 1}] Uploading {request.path}")
                await self._events.emit(TASK_START, request)
                return await self._task.run(request)
            finally:
                self._running -= 1

    async def _cancel_remaining_tasks(self, tasks: List[asyncio.Task]) -> None:
        """Cancel all remaining tasks gracefully."""
        for task in tasks:
            if not task.done():
                task.cancel()

        await asyncio.gather(*tasks, return_exceptions=True)


async def run_batch(
    config: UploadConfig,
    client: Optional[IUploadClient] = None,
    presenter: Optional["OutputPresenter"] = None,
) -> List[TaskOutcome]:
    """
    Run ``config.files`` through an orchestrator.

    Opens an HTTPUploadClient for ``config.endpoint`` when no client is given
    and wires ``presenter`` to the orchestrator events.
    """
    if client is None:
        async with HTTPUploadClient(
            config.endpoint,
            timeout=config.timeout,
            max_connections=config.concurrency,
        ) as http_client:
            return await run_batch(config, http_client, presenter)

    orchestrator = UploadOrchestrator(client, config)
    if presenter is not None:
        orchestrator.events.on(TASK_START, presenter.on_task_start)
        orchestrator.events.on(TASK_COMPLETE, presenter.present)
    return await orchestrator.run_batch()
