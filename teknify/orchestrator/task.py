"""Single file upload task."""
import logging

from ..models import OutputMode, TaskOutcome, TransportFailure, UploadRequest
from ..protocols import IUploadClient
from ..services.reply import interpret

logger = logging.getLogger(__name__)


class UploadTask:
    """Uploads one file and classifies the reply into a TaskOutcome."""

    def __init__(self, client: IUploadClient, mode: OutputMode):
        """
        Initialize upload task runner.

        Args:
            client: Upload client (HTTPUploadClient or a fake)
            mode: Output mode used to interpret successful replies
        """
        self._client = client
        self._mode = mode

    async def run(self, request: UploadRequest) -> TaskOutcome:
        """
        Upload ``request.path`` and return its outcome.

        Never raises for per-file problems: every failure path returns a
        TaskOutcome so the batch always sees one outcome per file.
        """
        path = request.path
        seq = request.sequence_id

        try:
            response = await self._client.upload(path)

            if isinstance(response, TransportFailure):
                return TaskOutcome.transport_error(path, response.message, seq)

            if not response.is_ok:
                return TaskOutcome.application_error(
                    path, f"unexpected status {response.status_code}", seq
                )

            reply = interpret(response.body, self._mode, path)
            if not reply.success:
                return TaskOutcome.application_error(path, reply.error, seq)
            return TaskOutcome.ok(path, reply.text, seq)

        except Exception as e:
            error_msg = str(e) or f"{type(e).__name__}"
            logger.exception(f"Unexpected error uploading {path}: {error_msg}")
            return TaskOutcome.transport_error(path, error_msg, seq)
