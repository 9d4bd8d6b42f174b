from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from .errors import StorageError
from .models import Dataset, empty_dataset

logger = logging.getLogger(__name__)


class JsonStore:
    """Single JSON document holding every user and board.

    ``load`` and ``save`` always act on the whole dataset. Callers that
    mutate wrap the load/save pair in ``transaction()`` so that cycles in
    this process never interleave.
    """

    def __init__(self, path: Union[str, Path], *, strict: bool = False) -> None:
        self.path = Path(path)
        self.strict = strict
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["JsonStore"]:
        with self._lock:
            yield self

    # === Reading ===
    def load(self) -> Dataset:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.info("No data file at %s, starting with an empty dataset", self.path)
            return self._bootstrap()
        except OSError as exc:
            logger.exception("Failed to read %s", self.path)
            raise StorageError(f"cannot read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too
            return self._recover(f"invalid JSON ({exc})")
        if not isinstance(data, dict):
            return self._recover(f"top-level {type(data).__name__}, expected an object")

        if not isinstance(data.get("users"), list):
            data["users"] = []
        if not isinstance(data.get("boards"), list):
            data["boards"] = []
        return data  # type: ignore[return-value]

    def _bootstrap(self) -> Dataset:
        data = empty_dataset()
        self.save(data)
        return data

    def _recover(self, reason: str) -> Dataset:
        if self.strict:
            raise StorageError(f"{self.path} is unreadable: {reason}")
        quarantine = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time())}")
        try:
            os.replace(self.path, quarantine)
        except OSError as exc:
            raise StorageError(f"cannot move aside {self.path}: {exc}") from exc
        logger.warning("Data file %s is unreadable (%s); moved to %s", self.path, reason, quarantine)
        return self._bootstrap()

    # === Writing ===
    def save(self, data: Dataset) -> None:
        body = json.dumps(data, ensure_ascii=False, indent=2)
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(body)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.exception("Failed to write %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
