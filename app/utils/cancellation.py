import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from starlette.requests import Request

from app.recipe.exception import ExtractionErrorCode, ExtractionException

logger = logging.getLogger(__name__)

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.5


class CancellationToken:
    """Set once the caller is gone; stages check it before each external call."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise asyncio.CancelledError()


def raise_if_cancelled(token: Optional[CancellationToken]) -> None:
    if token is not None:
        token.raise_if_cancelled()


async def run_until_disconnected(
    request: Request,
    work: Callable[[CancellationToken], Awaitable[T]],
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> T:
    """Run `work` as a task and abort it when the HTTP client disconnects."""
    token = CancellationToken()
    task = asyncio.ensure_future(work(token))
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()

            if await request.is_disconnected():
                logger.info(f"Client disconnected, cancelling extraction: path={request.url.path}")
                token.cancel()
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
                raise ExtractionException(ExtractionErrorCode.CLIENT_DISCONNECTED)
    finally:
        if not task.done():
            token.cancel()
            task.cancel()
