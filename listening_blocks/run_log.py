from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, TextIO


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _truncate(text: str, *, limit: int) -> str:
    s = str(text or "")
    if limit <= 0:
        return ""
    if len(s) <= limit:
        return s
    return s[: max(0, limit - 1)] + "…"


class RunLogger:
    """
    Tiny JSONL logger for pipeline diagnostics.

    Each log line is a single JSON object keyed by `event`. Without a path the records are
    only kept in memory (see `records`).
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        overwrite: bool = True,
        session_id: str | None = None,
    ) -> None:
        self._path = Path(path) if path is not None else None
        self._overwrite = bool(overwrite)
        self._session_id = (session_id or "").strip() or uuid.uuid4().hex
        self._fp: TextIO | None = None
        self._lock = Lock()
        self.records: list[dict[str, Any]] = []

    @classmethod
    def open(
        cls,
        path: str | Path | None = None,
        *,
        overwrite: bool = True,
        session_id: str | None = None,
    ) -> "RunLogger":
        logger = cls(path, overwrite=overwrite, session_id=session_id)
        logger._ensure_open()
        return logger

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                try:
                    self._fp.flush()
                finally:
                    self._fp.close()
                self._fp = None

    def __enter__(self) -> "RunLogger":
        self._ensure_open()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def events(self, level: str | None = None) -> list[str]:
        lvl = (level or "").strip().upper()
        return [r["event"] for r in self.records if not lvl or r["level"] == lvl]

    def info(self, event: str, *, link: str | None = None, **data: Any) -> None:
        self.log("INFO", event, link=link, **data)

    def warning(self, event: str, *, link: str | None = None, **data: Any) -> None:
        self.log("WARN", event, link=link, **data)

    def error(self, event: str, *, link: str | None = None, **data: Any) -> None:
        self.log("ERROR", event, link=link, **data)

    def exception(
        self,
        event: str,
        *,
        exc: BaseException,
        link: str | None = None,
        **data: Any,
    ) -> None:
        err = {
            "type": type(exc).__name__,
            "message": _truncate(str(exc), limit=2000),
            "traceback": _truncate(
                "".join(
                    traceback.format_exception(
                        type(exc), exc, exc.__traceback__
                    )
                ),
                limit=12000,
            ),
        }
        self.log("ERROR", event, link=link, error=err, **data)

    def log(self, level: str, event: str, *, link: str | None = None, **data: Any) -> None:
        lvl = (level or "").strip().upper() or "INFO"
        ev = (event or "").strip() or "event"

        record: dict[str, Any] = {
            "ts": _utc_now_iso(),
            "level": lvl,
            "event": ev,
            "session_id": self._session_id,
        }

        u = (link or "").strip()
        if u:
            record["link"] = u

        if data:
            record["data"] = data

        self._write(record)

    def _ensure_open(self) -> None:
        if self._fp is not None or self._path is None:
            return

        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Later reopens (after close) always append.
            mode = "w" if self._overwrite else "a"
            self._overwrite = False
            self._fp = self._path.open(mode, encoding="utf-8", newline="\n")

    def _write(self, record: dict[str, Any]) -> None:
        self._ensure_open()

        with self._lock:
            self.records.append(record)
            if self._fp is None:
                return
            payload = json.dumps(
                record,
                ensure_ascii=False,
                sort_keys=True,
                separators=(",", ":"),
                default=str,
            )
            self._fp.write(payload + "\n")
            self._fp.flush()
