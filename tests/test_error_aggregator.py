import threading

from feedmixer.collectors import ErrorAggregator
from feedmixer.contracts import ErrorRecord
from feedmixer.errors import FetchError, MergeError


def test_new_aggregator_is_empty() -> None:
    errors = ErrorAggregator()

    assert errors.is_empty()
    assert errors.records() == []
    assert len(errors) == 0


def test_add_error_uses_exception_code_and_context() -> None:
    errors = ErrorAggregator()

    errors.add_error(FetchError("timed out"), "Error of getting content for content structure")
    errors.add_error(MergeError("boom"))

    assert errors.records() == [
        ErrorRecord(code=503, message="Error of getting content for content structure: timed out"),
        ErrorRecord(code=502, message="boom"),
    ]


def test_records_returns_a_snapshot() -> None:
    errors = ErrorAggregator()
    errors.add(503, "first")

    snapshot = errors.records()
    errors.add(503, "second")

    assert len(snapshot) == 1
    assert len(errors.records()) == 2


def test_concurrent_appends_are_not_lost() -> None:
    errors = ErrorAggregator()
    writers = 8
    per_writer = 250
    barrier = threading.Barrier(writers)

    def write(worker: int) -> None:
        barrier.wait()
        for index in range(per_writer):
            errors.add(503, f"worker {worker} entry {index}")

    threads = [threading.Thread(target=write, args=(worker,)) for worker in range(writers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    records = errors.records()
    assert len(records) == writers * per_writer
    assert len({record.message for record in records}) == writers * per_writer
