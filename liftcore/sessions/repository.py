"""Attempt storage.

The session manager only depends on ``AttemptRepository``. The in-memory
store backs tests and single-process use; the JSON store keeps one file
per attempt under a per-trainee directory so history survives restarts.
"""

from __future__ import annotations

import copy
import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from liftcore.errors import InvalidInputError
from liftcore.models.attempt import ScenarioAttempt

_GLOB_CHARS = frozenset("*?[]")


class AttemptRepository(ABC):
    """Narrow storage interface for attempts."""

    @abstractmethod
    def get_by_id(self, attempt_id: str) -> Optional[ScenarioAttempt]:
        """Return the attempt or None."""

    @abstractmethod
    def append_for_trainee(self, attempt: ScenarioAttempt) -> None:
        """Add a new attempt to the end of its trainee's history."""

    @abstractmethod
    def list_for_trainee(self, trainee_id: str) -> List[ScenarioAttempt]:
        """Attempts of one trainee in the order they were started."""

    @abstractmethod
    def save(self, attempt: ScenarioAttempt) -> None:
        """Persist changes to an attempt already in the repository."""

    def has_trainee(self, trainee_id: str) -> bool:
        return bool(self.list_for_trainee(trainee_id))


class InMemoryAttemptRepository(AttemptRepository):
    """Holds private copies; callers never share a record with the store."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_trainee: Dict[str, List[str]] = {}
        self._by_id: Dict[str, ScenarioAttempt] = {}

    def get_by_id(self, attempt_id: str) -> Optional[ScenarioAttempt]:
        attempt = self._by_id.get(attempt_id)
        return copy.deepcopy(attempt) if attempt is not None else None

    def append_for_trainee(self, attempt: ScenarioAttempt) -> None:
        with self._lock:
            self._by_trainee.setdefault(attempt.trainee_id, []).append(attempt.id)
            self._by_id[attempt.id] = copy.deepcopy(attempt)

    def list_for_trainee(self, trainee_id: str) -> List[ScenarioAttempt]:
        with self._lock:
            return [copy.deepcopy(self._by_id[i]) for i in self._by_trainee.get(trainee_id, [])]

    def save(self, attempt: ScenarioAttempt) -> None:
        with self._lock:
            if attempt.id not in self._by_id:
                raise KeyError(attempt.id)
            self._by_id[attempt.id] = copy.deepcopy(attempt)


def _path_segment(value: str, label: str) -> str:
    """Accept ``value`` only if it names exactly one file inside a directory."""
    if (
        not value
        or value in (".", "..")
        or Path(value).name != value
        or "\\" in value
        or _GLOB_CHARS.intersection(value)
    ):
        raise InvalidInputError(f"{label} {value!r} cannot be used as a file name")
    return value


class JsonAttemptRepository(AttemptRepository):
    """One ``<attempt id>.json`` per attempt in ``<root>/<trainee id>/``.

    Trainee and attempt ids become path segments, so ids containing path
    separators, ``..`` or glob characters are rejected with
    ``InvalidInputError``.
    """

    def __init__(self, root: str | Path = "attempts"):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _trainee_dir(self, trainee_id: str) -> Path:
        return self.root / _path_segment(trainee_id, "trainee id")

    def _attempt_path(self, attempt: ScenarioAttempt) -> Path:
        name = _path_segment(attempt.id, "attempt id")
        return self._trainee_dir(attempt.trainee_id) / f"{name}.json"

    def _write(self, attempt: ScenarioAttempt) -> None:
        path = self._attempt_path(attempt)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(attempt.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(path)

    @staticmethod
    def _read(path: Path) -> ScenarioAttempt:
        return ScenarioAttempt.from_dict(json.loads(path.read_text(encoding="utf-8")))

    def get_by_id(self, attempt_id: str) -> Optional[ScenarioAttempt]:
        name = _path_segment(attempt_id, "attempt id")
        for path in self.root.glob(f"*/{name}.json"):
            return self._read(path)
        return None

    def append_for_trainee(self, attempt: ScenarioAttempt) -> None:
        with self._lock:
            self._write(attempt)

    def list_for_trainee(self, trainee_id: str) -> List[ScenarioAttempt]:
        folder = self._trainee_dir(trainee_id)
        if not folder.is_dir():
            return []
        attempts = [self._read(p) for p in folder.glob("*.json")]
        attempts.sort(key=lambda a: (a.started_at, a.id))
        return attempts

    def save(self, attempt: ScenarioAttempt) -> None:
        with self._lock:
            if not self._attempt_path(attempt).exists():
                raise KeyError(attempt.id)
            self._write(attempt)
