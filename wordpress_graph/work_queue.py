"""
Bounded Work Queue - Runs fetch tasks with a hard cap on concurrency.

A queue is created for one fetch operation, filled with task ids (page URLs),
processed once, and discarded. Tasks run on a ThreadPoolExecutor whose worker
count is the concurrency cap, so no more than `concurrency` handlers are ever
running at the same moment.

Completion callbacks are not called from the worker threads. process() waits
on the futures from the calling thread and invokes on_success/on_failure
there, one at a time, so whatever the callbacks accumulate into never sees
two writers.

Teardown:
    Calling destroy() (typically from on_failure) stops the queue: pending
    tasks that have not started are cancelled, tasks already running are left
    to finish but their results are ignored, and process() returns without
    waiting for them.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, List


class BoundedWorkQueue:
    """Concurrency-capped task runner with per-task callbacks.

    Attributes:
        handler: Callable run on a worker thread for each task id.
        concurrency: Maximum number of handlers running at once.
        debug: If True, prints dispatch and teardown details.
    """

    def __init__(self, handler: Callable[[str], Any], concurrency: int = 10, debug: bool = False):
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.handler = handler
        self.concurrency = concurrency
        self.debug = debug
        self._tasks: List[str] = []
        self._destroyed = False
        self._drained = False

    def push(self, task_id: str):
        """Add a task id to the queue. Only allowed before process()."""
        if self._destroyed:
            raise RuntimeError("Cannot push to a destroyed queue")
        self._tasks.append(task_id)

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def drained(self) -> bool:
        """True once every task has completed and none were abandoned."""
        return self._drained

    def destroy(self):
        """Stop dispatching tasks and ignore any still in flight."""
        if self.debug and not self._destroyed:
            print("  Work queue torn down")
        self._destroyed = True

    def process(
        self,
        on_success: Callable[[str, Any], None],
        on_failure: Callable[[str, Exception], None],
    ) -> bool:
        """Run every queued task and report each outcome.

        Args:
            on_success: Called as on_success(task_id, result).
            on_failure: Called as on_failure(task_id, error).

        Returns:
            True if the queue drained, False if it was destroyed first.
        """
        if not self._tasks:
            self._drained = True
            return True

        workers = min(self.concurrency, len(self._tasks))
        if self.debug:
            print(f"  Dispatching {len(self._tasks)} task(s) on {workers} worker(s)")

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures = {executor.submit(self.handler, task_id): task_id for task_id in self._tasks}

            for future in as_completed(futures):
                if self._destroyed:
                    break

                task_id = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    on_failure(task_id, e)
                else:
                    on_success(task_id, result)

                if self._destroyed:
                    break
        finally:
            executor.shutdown(wait=not self._destroyed, cancel_futures=self._destroyed)

        self._drained = not self._destroyed
        return self._drained
