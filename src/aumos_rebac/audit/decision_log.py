"""Append-only JSONL audit log of authorization decisions.

Every decision produced by a :class:`~aumos_rebac.resource.ReBACProtectedResource`
with an attached logger is written as one JSON line. Granted records carry the
full relation path that justified the grant, so an auditor can see exactly
which chain of relations opened the door.

Thread-safety is achieved with a threading.Lock so the logger is safe to
call from multiple threads within the same process.

Example
-------
>>> from pathlib import Path
>>> audit = DecisionAuditLogger(Path("/tmp/rebac_audit.jsonl"))
>>> resource = ReBACProtectedResource("doc1", graph, audit_logger=audit)
>>> resource.check_relation("alice", "write")
>>> audit.query({"subject": "alice", "type": "granted"})
[...]
"""
from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from aumos_rebac.resource.decision import ReBACDecision

logger = logging.getLogger(__name__)

DECISION_EVENT = "rebac_decision"


class DecisionAuditLogger:
    """Append-only JSONL log of ReBAC decisions.

    Parameters
    ----------
    log_path:
        Path to the ``.jsonl`` audit file. Parent directories are created
        automatically on first write.
    session_id:
        Optional session identifier stamped on every record. A random UUID
        is generated if not supplied.
    """

    def __init__(
        self,
        log_path: Path,
        session_id: str | None = None,
    ) -> None:
        self._log_path = Path(log_path)
        self._session_id: str = session_id or str(uuid.uuid4())
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def record(
        self,
        subject: str,
        resource: str,
        action: str,
        decision: ReBACDecision,
    ) -> dict[str, object]:
        """Append one decision record and return it.

        The ``timestamp``, ``session_id`` and ``event`` fields are added
        automatically. Decision fields (``type``, ``reason``, ``path``, ...)
        are flattened into the record.
        """
        entry: dict[str, object] = {
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            "session_id": self._session_id,
            "event": DECISION_EVENT,
            "subject": subject,
            "resource": resource,
            "action": action,
            **decision.to_dict(),
        }
        self._write(entry)
        return entry

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def read_all(self) -> list[dict[str, object]]:
        """Return all records in chronological order.

        Returns an empty list when the log file does not exist.
        """
        return list(self._iter_records())

    def query(self, filters: dict[str, object]) -> list[dict[str, object]]:
        """Return records where every ``{field: value}`` pair matches (AND).

        Top-level keys only.
        """
        return [
            record
            for record in self._iter_records()
            if all(record.get(k) == v for k, v in filters.items())
        ]

    def count(self) -> int:
        """Return the total number of records."""
        return sum(1 for _ in self._iter_records())

    def last_n(self, n: int) -> list[dict[str, object]]:
        """Return the ``n`` most recent records. ``n <= 0`` returns nothing."""
        if n <= 0:
            return []
        all_records = list(self._iter_records())
        return all_records[-n:] if n < len(all_records) else all_records

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _write(self, record: dict[str, object]) -> None:
        with self._lock:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(record, default=str) + "\n")

    def _iter_records(self) -> Iterator[dict[str, object]]:
        if not self._log_path.exists():
            return
        with self._lock:
            with self._log_path.open("r", encoding="utf-8") as fh:
                lines = fh.readlines()
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                logger.warning(
                    "Skipping malformed audit line %d in %s", line_number, self._log_path
                )

    @property
    def log_path(self) -> Path:
        """The filesystem path of the audit log file."""
        return self._log_path

    @property
    def session_id(self) -> str:
        """The session identifier stamped on every record."""
        return self._session_id
