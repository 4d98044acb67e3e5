"""Helpers shared by the test suites."""

import json

from pydantic import BaseModel, ConfigDict, Field


class TickRecord(BaseModel):
    """One line of the tick stream. Field names are a contract with log shippers."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    meta_name: str = Field(alias="meta.name")
    meta_process_age_s: int = Field(alias="meta.process_age_s", ge=0)
    timestamp: str
    msg: str
    new_events_count: int = Field(alias="new_events.count", ge=0)


def read_records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]
