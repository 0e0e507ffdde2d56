"""
Template processing pipeline.

process_template() runs parse -> build -> layout in one call. TemplateWorker
moves that call onto a single background thread so an event loop stays
responsive while large templates are processed.
"""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict

from .config import LayoutOptions
from .core.exceptions import LayoutError, WorkerTerminatedError
from .core.result import Err, Ok, Result
from .core.types import GraphData
from .graph.builder import build_graph
from .graph.layout import compute_layout
from .parsing.template import parse_template

logger = logging.getLogger(__name__)

WORKER_UNAVAILABLE = "Worker not available"
UNEXPECTED_WORKER_ERROR = "An unexpected error occurred in worker"


def process_template(
    raw_text: str,
    options: LayoutOptions | None = None,
) -> Result[GraphData, str]:
    """
    Turn template text into a positioned graph.

    Returns:
        Ok(GraphData) with every node positioned, or Err(message) when the
        template is invalid or layout fails.
    """
    parsed = parse_template(raw_text)
    if parsed.is_err():
        return Err(parsed.error.message)

    graph = build_graph(parsed.unwrap())

    try:
        compute_layout(graph.nodes, graph.edges, options)
    except LayoutError as e:
        logger.warning(f"Layout failed, graph left unpositioned: {e}")
        return Err(str(e))

    logger.info(f"Processed template: {len(graph.nodes)} resources, {len(graph.edges)} dependencies")
    return Ok(graph)


class TemplateWorker:
    """
    Background processor for templates.

    One thread runs one request at a time; further requests queue in FIFO
    order. Every request gets an id (req-1, req-2, ...). A caller that
    fires a new request while an older one is still running can compare
    against latest_request_id and drop the stale result.

    process() and terminate() must be called from the event loop thread.

    Example:
        worker = TemplateWorker()
        worker.start()
        result = await worker.process(text)
        worker.terminate()
    """

    def __init__(self, options: LayoutOptions | None = None):
        self._options = options
        self._executor: ThreadPoolExecutor | None = None
        self._pending: Dict[str, asyncio.Future] = {}
        self._request_count = 0
        self._latest_request_id: str | None = None

    def start(self) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cfngraph-worker")
            logger.debug("Template worker started")

    @property
    def is_available(self) -> bool:
        return self._executor is not None

    @property
    def is_processing(self) -> bool:
        return bool(self._pending)

    @property
    def latest_request_id(self) -> str | None:
        return self._latest_request_id

    def _next_request_id(self) -> str:
        self._request_count += 1
        return f"req-{self._request_count}"

    def _run(self, raw_text: str) -> Result[GraphData, str]:
        try:
            return process_template(raw_text, self._options)
        except Exception as e:
            logger.exception("Template worker failed")
            return Err(str(e) or UNEXPECTED_WORKER_ERROR)

    def _settle(self, request_id: str, job: Future) -> None:
        future = self._pending.get(request_id)
        if future is None or future.done():
            return
        if job.cancelled():
            future.set_exception(WorkerTerminatedError(request_id))
        else:
            future.set_result(job.result())

    async def process(self, raw_text: str) -> Result[GraphData, str]:
        """
        Process a template on the worker thread.

        Returns:
            The process_template() result. Err("Worker not available") when
            start() was never called or the worker was terminated.

        Raises:
            WorkerTerminatedError: terminate() ran while this request was
                in flight.
        """
        if self._executor is None:
            return Err(WORKER_UNAVAILABLE)

        request_id = self._next_request_id()
        self._latest_request_id = request_id
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._pending[request_id] = future
        logger.debug(f"Submitting {request_id}")

        def on_done(job: Future) -> None:
            if not loop.is_closed():
                loop.call_soon_threadsafe(self._settle, request_id, job)

        self._executor.submit(self._run, raw_text).add_done_callback(on_done)

        try:
            return await future
        finally:
            self._pending.pop(request_id, None)

    def terminate(self) -> None:
        """Fail every in-flight request and stop the thread without waiting."""
        if self._pending:
            logger.warning(f"Terminating worker with {len(self._pending)} pending request(s)")

        for request_id, future in list(self._pending.items()):
            if not future.done():
                future.set_exception(WorkerTerminatedError(request_id))
        self._pending.clear()

        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
            logger.debug("Template worker terminated")
