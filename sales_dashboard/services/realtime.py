"""Realtime notification of newly inserted sales.

The Supabase realtime client is asynchronous and Streamlit reruns are not, so
the subscription runs in its own thread and only hands decoded records over a
queue. The page drains the queue on its next rerun.
"""

from __future__ import annotations

import asyncio
import logging
import queue
import threading
from typing import Any, Dict, List, Optional

from supabase import acreate_client

from ..models import SaleRecord

logger = logging.getLogger(__name__)

CHANNEL_NAME = "custom-insert-channel"
STOP_POLL_SECONDS = 1.0


def extract_record(payload: Any) -> Optional[Dict[str, Any]]:
    """Inserted row of a ``postgres_changes`` payload."""
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("record"), dict):
        return data["record"]
    for key in ("new", "record"):
        if isinstance(payload.get(key), dict):
            return payload[key]
    return None


class RealtimeFeed:
    """Background subscription to INSERTs on the sales table."""

    def __init__(self, url: str, key: str, table: str, schema: str = "public") -> None:
        self.url = url
        self.key = key
        self.table = table
        self.schema = schema
        self.messages: "queue.Queue[SaleRecord]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="sales-realtime", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()

    def handle_payload(self, payload: Any) -> None:
        row = extract_record(payload)
        if row is None:
            logger.warning("Ignoring realtime payload without record: %r", payload)
            return
        try:
            record = SaleRecord.from_backend(row)
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed realtime record: %r", row)
            return
        logger.info("New sale received: id=%s value=%s", record.id, record.value)
        self.messages.put(record)

    def drain(self) -> List[SaleRecord]:
        """All records received since the last call, oldest first."""
        records = []
        while True:
            try:
                records.append(self.messages.get_nowait())
            except queue.Empty:
                return records

    def _run(self) -> None:
        try:
            asyncio.run(self._listen())
        except Exception:
            logger.exception("Realtime feed for %s stopped", self.table)

    async def _listen(self) -> None:
        client = await acreate_client(self.url, self.key)
        channel = client.channel(CHANNEL_NAME)
        channel.on_postgres_changes(
            "INSERT", schema=self.schema, table=self.table, callback=self.handle_payload
        )
        await channel.subscribe()
        logger.info("Subscribed to inserts on %s.%s", self.schema, self.table)
        try:
            while not self._stop.is_set():
                await asyncio.sleep(STOP_POLL_SECONDS)
        finally:
            await client.remove_channel(channel)
