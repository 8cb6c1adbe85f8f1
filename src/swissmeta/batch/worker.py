"""Background execution of a batch.

A ``BatchWorker`` runs a batch on its own thread so a caller's main loop
stays responsive. Progress, completion and failure are published as
``WorkerMessage`` objects on a queue; cancellation takes effect between two
simulated events.
"""

# Swiss Meta
# Copyright (C) 2025  Swiss Meta developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import queue
import threading
from dataclasses import dataclass
from typing import Optional

from swissmeta.batch.aggregator import BatchAggregator, BatchResults
from swissmeta.constants import DEFAULT_BATCH_ITERATIONS
from swissmeta.exceptions import SwissMetaException
from swissmeta.type_hints import MessageType
from swissmeta.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class WorkerMessage:
    """Message published by a batch worker.

    Attributes:
        type: "progress", "complete" or "error"
        progress: Percentage of the batch done
        current_simulation: Number of completed simulations
        results: Final results, on "complete"
        error: Error text, on "error"
    """

    type: MessageType
    progress: float = 0.0
    current_simulation: int = 0
    results: Optional[BatchResults] = None
    error: Optional[str] = None


class BatchWorker:
    """Runs a batch on a daemon thread.

    Example:
        >>> worker = BatchWorker(BatchAggregator(config), iterations=100)
        >>> worker.start()
        >>> for message in worker.iter_messages():
        ...     print(message.type, message.progress)
    """

    def __init__(
        self,
        aggregator: BatchAggregator,
        iterations: int = DEFAULT_BATCH_ITERATIONS,
    ):
        self.aggregator = aggregator
        self.iterations = iterations
        self.messages: "queue.Queue[WorkerMessage]" = queue.Queue()
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def start(self) -> None:
        """Start the batch thread."""
        if self.is_running:
            raise RuntimeError("Batch worker is already running")
        self._cancel.clear()
        self._thread = threading.Thread(
            target=self._run, name="swissmeta-batch", daemon=True
        )
        self._thread.start()

    def cancel(self) -> None:
        """Ask the batch to stop before its next simulation."""
        logger.info("Cancellation requested")
        self._cancel.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def iter_messages(self, timeout: Optional[float] = None):
        """Yield messages until a "complete" or "error" message arrives."""
        while True:
            message = self.messages.get(timeout=timeout)
            yield message
            if message.type != "progress":
                return

    def _on_progress(self, completed: int, total: int) -> None:
        self.messages.put(
            WorkerMessage(
                type="progress",
                progress=(completed / total) * 100 if total else 100.0,
                current_simulation=completed,
            )
        )

    def _run(self) -> None:
        try:
            results = self.aggregator.run(
                self.iterations,
                progress_callback=self._on_progress,
                should_stop=self._cancel.is_set,
            )
        except SwissMetaException as e:
            logger.error("Batch failed: %s", e)
            self.messages.put(WorkerMessage(type="error", error=str(e)))
            return
        except Exception as e:
            # Surfaced to the consumer as an error message
            logger.exception("Unexpected batch failure")
            self.messages.put(WorkerMessage(type="error", error=repr(e)))
            return

        self.messages.put(
            WorkerMessage(
                type="complete",
                progress=(
                    (results.iterations / self.iterations) * 100
                    if self.iterations
                    else 100.0
                ),
                current_simulation=results.iterations,
                results=results,
            )
        )
