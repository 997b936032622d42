"""Local stream execution environment.

This module runs one read, transform, and write job on the calling
thread. Records are pulled lazily from the reader through the
transformer into the writer; the call blocks until the source ends
or an error is raised. Every stage is closed before ``execute``
returns or raises, so the source consumer never outlives the job.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
import time
from typing import Iterable, Iterator

from core.constants import DEFAULT_PROGRESS_LOG_INTERVAL
from core.logging_config import get_logger
from core.types import RawRecord, StreamJobResult
from pipelines.contracts import RecordTransformer, SinkWriter, SourceReader

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class StreamJob:
    """A fully bound read, transform, and write job."""

    name: str
    input_channel: str
    output_channel: str
    reader: SourceReader
    transformer: RecordTransformer
    writer: SinkWriter


class LocalStreamEnvironment:
    """Executes stream jobs in-process."""

    def __init__(self, progress_log_interval: int = DEFAULT_PROGRESS_LOG_INTERVAL) -> None:
        self._progress_log_interval = progress_log_interval

    def execute(self, job: StreamJob) -> StreamJobResult:
        """Run a job to completion.

        Args:
            job: Job to run.

        Returns:
            Counts and duration for the finished job.
        """
        _LOGGER.info(
            "stream_job_started",
            job_name=job.name,
            input_channel=job.input_channel,
            output_channel=job.output_channel,
        )
        started_at = time.monotonic()
        counter = _ReadCounter(job.name, self._progress_log_interval)
        with ExitStack() as stages:
            # Callbacks run in reverse, so the outermost stage closes first.
            raw_records = job.reader.read_from(job.input_channel)
            stages.callback(_close_stage, raw_records)
            counted_records = counter.count(raw_records)
            stages.callback(_close_stage, counted_records)
            labeled_records = job.transformer.transform(counted_records)
            stages.callback(_close_stage, labeled_records)
            records_written = job.writer.write_to(job.output_channel, labeled_records)
        stats = job.transformer.stats
        result = StreamJobResult(
            job_name=job.name,
            records_read=counter.records_read,
            records_written=records_written,
            records_skipped=stats.skipped,
            records_duplicate=stats.duplicates,
            duration_seconds=round(time.monotonic() - started_at, 3),
        )
        _LOGGER.info(
            "stream_job_completed",
            job_name=result.job_name,
            records_read=result.records_read,
            records_written=result.records_written,
            records_skipped=result.records_skipped,
            records_duplicate=result.records_duplicate,
            duration_seconds=result.duration_seconds,
        )
        return result


class _ReadCounter:
    """Counts records flowing out of the reader and logs progress."""

    def __init__(self, job_name: str, log_interval: int) -> None:
        self._job_name = job_name
        self._log_interval = log_interval
        self.records_read = 0

    def count(self, records: Iterable[RawRecord]) -> Iterator[RawRecord]:
        for record in records:
            self.records_read += 1
            if self.records_read % self._log_interval == 0:
                _LOGGER.info(
                    "stream_progress",
                    job_name=self._job_name,
                    records_read=self.records_read,
                )
            yield record


def _close_stage(stage: Iterable[object]) -> None:
    """Close a generator stage; plain iterables need no cleanup.

    Args:
        stage: Iterable returned by a reader, counter, or transformer.
    """
    close = getattr(stage, "close", None)
    if close is not None:
        close()
