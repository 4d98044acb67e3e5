"""
Structured log sink for the scheduler.

Every record is one compact JSON object on its own line. Process metadata is
attached by field providers that run when the record is built, so uptime and
timestamp reflect the moment of emission.
"""

import logging
import sys
import threading
import time
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TextIO

import structlog

FieldProvider = Callable[[Dict[str, Any]], Any]


@dataclass(frozen=True)
class ProcessMetadata:
    name: str
    started_at: float = field(default_factory=time.monotonic)

    def age_s(self) -> int:
        """Whole seconds since the process started."""
        return int(time.monotonic() - self.started_at)


class LockedLineWriter:
    """Writes rendered records to a stream, one line per record, under a lock."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._lock = threading.Lock()

    def msg(self, message: str) -> None:
        with self._lock:
            self._stream.write(message + "\n")
            self._stream.flush()

    debug = info = warning = warn = error = critical = exception = fatal = msg


def rfc3339_now() -> str:
    return dt.datetime.now().astimezone().isoformat(timespec="microseconds")


def field_providers(meta: ProcessMetadata) -> Dict[str, FieldProvider]:
    return {
        "meta.name": lambda event_dict: meta.name,
        "meta.process_age_s": lambda event_dict: meta.age_s(),
        "timestamp": lambda event_dict: rfc3339_now(),
        "msg": lambda event_dict: event_dict.pop("event", ""),
    }


def add_process_fields(meta: ProcessMetadata):
    providers = field_providers(meta)

    def processor(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        record = {key: provide(event_dict) for key, provide in providers.items()}
        # provider fields win over caller fields of the same name
        record.update((key, value) for key, value in event_dict.items() if key not in record)
        return record

    return processor


def make_logger(meta: ProcessMetadata, stream: Optional[TextIO] = None, level: str = "info"):
    """Build the JSON-lines logger. Defaults to stdout."""
    writer = LockedLineWriter(stream if stream is not None else sys.stdout)
    return structlog.wrap_logger(
        writer,
        processors=[
            structlog.processors.format_exc_info,
            add_process_fields(meta),
            structlog.processors.JSONRenderer(separators=(",", ":")),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
