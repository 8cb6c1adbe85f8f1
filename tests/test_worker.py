import threading

import pytest

from swissmeta.batch.aggregator import BatchAggregator, BatchResults
from swissmeta.batch.worker import BatchWorker
from swissmeta.exceptions import SwissMetaException
from swissmeta.tournament.models import TournamentConfig


class GatedAggregator:
    """Aggregator stand-in that waits for a release after every event."""

    def __init__(self):
        self.release = threading.Event()

    def run(self, iterations, progress_callback=None, should_stop=None):
        results = BatchResults.for_decks(["Aggro"])
        for iteration in range(1, iterations + 1):
            if should_stop():
                break
            results.iterations = iteration
            progress_callback(iteration, iterations)
            self.release.wait(timeout=5)
        return results


class FailingAggregator:
    def __init__(self, error):
        self.error = error

    def run(self, iterations, progress_callback=None, should_stop=None):
        raise self.error


def _config():
    return TournamentConfig(
        matchup_matrix=[[0.5, 0.5], [0.5, 0.5]],
        meta_percentages=[50, 50],
        deck_names=["Aggro", "Control"],
        n_players=24,
        skill_percents=[0, 0],
        seed=5,
    )


def test_worker_reports_progress_then_completion():
    worker = BatchWorker(BatchAggregator(_config()), iterations=3)
    worker.start()
    messages = list(worker.iter_messages(timeout=60))
    worker.join(timeout=5)

    assert [m.type for m in messages] == ["progress"] * 3 + ["complete"]
    assert [m.current_simulation for m in messages[:3]] == [1, 2, 3]
    assert messages[-1].progress == pytest.approx(100.0)
    assert messages[-1].results.iterations == 3
    assert not worker.is_running


def test_cancel_stops_between_events():
    aggregator = GatedAggregator()
    worker = BatchWorker(aggregator, iterations=10)
    worker.start()

    first = worker.messages.get(timeout=5)
    assert first.type == "progress"
    worker.cancel()
    aggregator.release.set()

    last = list(worker.iter_messages(timeout=5))[-1]
    worker.join(timeout=5)
    assert worker.cancelled
    assert last.type == "complete"
    assert last.results.iterations == 1
    assert last.progress == pytest.approx(10.0)


def test_worker_cannot_start_twice():
    aggregator = GatedAggregator()
    worker = BatchWorker(aggregator, iterations=2)
    worker.start()
    try:
        with pytest.raises(RuntimeError):
            worker.start()
    finally:
        aggregator.release.set()
        worker.join(timeout=5)


def test_application_errors_become_error_messages():
    worker = BatchWorker(FailingAggregator(SwissMetaException("boom")), iterations=1)
    worker.start()
    message = worker.messages.get(timeout=5)
    worker.join(timeout=5)

    assert message.type == "error"
    assert message.error == "boom"


def test_unexpected_errors_become_error_messages():
    worker = BatchWorker(FailingAggregator(KeyError("Burn")), iterations=1)
    worker.start()
    message = worker.messages.get(timeout=5)
    worker.join(timeout=5)

    assert message.type == "error"
    assert "Burn" in message.error
