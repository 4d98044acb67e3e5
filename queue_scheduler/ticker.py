# queue_scheduler/ticker.py
import argparse
import logging
import sys
import time
from typing import Callable, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from . import config
from .db import open_connection
from .logsink import ProcessMetadata, make_logger

LOG = logging.getLogger(__name__)

PROCESS_NAME = "queue-scheduler"
TICK_INTERVAL_S = 1
COUNT_NEW_EVENTS = "SELECT COUNT(*) FROM events WHERE status = 'new'"


class TickError(RuntimeError):
    """The count query returned something other than a single integer."""


def count_new_events(conn: Connection) -> int:
    row = conn.execute(text(COUNT_NEW_EVENTS)).first()
    if row is None:
        raise TickError("count query returned no rows")
    count = row[0]
    if isinstance(count, bool) or not isinstance(count, int):
        raise TickError(f"count query returned {count!r}, expected an integer")
    return count


def tick(conn: Connection, log) -> int:
    count = count_new_events(conn)
    log.info("tick", **{"new_events.count": count})
    return count


def run(conn: Connection, log, sleep: Callable[[float], None] = time.sleep):
    """Tick forever. Any failure propagates; there is no retry and no exit."""
    while True:
        sleep(TICK_INTERVAL_S)
        tick(conn, log)


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(prog=PROCESS_NAME)
    parser.add_argument("--once", action="store_true", help="run a single tick and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, stream=sys.stderr, format="[queue-scheduler] %(message)s")

    meta = ProcessMetadata(name=PROCESS_NAME)
    log = make_logger(meta)

    cfg = config.load()
    try:
        conn = open_connection(cfg.database.url)
        LOG.info("connected to %s", conn.engine.url.render_as_string(hide_password=True))
        if args.once:
            time.sleep(TICK_INTERVAL_S)
            tick(conn, log)
            return
        run(conn, log)
    except (SQLAlchemyError, TickError) as e:
        sys.exit(f"{PROCESS_NAME}: {e}")


if __name__ == "__main__":
    main()
