"""
JSON Document Store with File Locking

Each entity kind (products, orders) lives in its own pretty-printed JSON
document holding a top-level array. Every mutation rewrites the whole
document; there is no append log.

Failure policy:
    - load_or_seed(): errors are logged, None is returned, the caller keeps
      whatever collection it already had
    - read(): errors propagate so the caller can fall back to memory
    - save(): errors are logged and reported as False, never raised

Version: 1.0.0
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional

from filelock import FileLock, Timeout

logger = logging.getLogger(__name__)


class StoreUnavailableError(OSError):
    """The document could not be locked in time."""


class JsonDocumentStore:
    """Lock-guarded reader/writer for one JSON array document."""

    def __init__(self, path: Path, lock_timeout: float = 10, label: Optional[str] = None):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout
        self.label = label or self.path.stem

    def __repr__(self) -> str:
        return f"JsonDocumentStore({str(self.path)!r})"

    def _lock(self) -> FileLock:
        return FileLock(str(self.lock_path), timeout=self.lock_timeout)

    def _ensure_data_dir(self) -> None:
        """Create data directory if needed."""
        directory = self.path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {directory}")

    def exists(self) -> bool:
        return self.path.exists()

    def _write(self, collection: list[dict[str, Any]]) -> None:
        payload = json.dumps(collection, indent=2, ensure_ascii=False)
        self.path.write_text(payload, encoding="utf-8")

    def read(self) -> list[dict[str, Any]]:
        """
        Parse the document.

        Raises:
            OSError: File missing or unreadable (StoreUnavailableError on lock timeout)
            ValueError: Content is not valid JSON or not an array
        """
        try:
            with self._lock():
                data = json.loads(self.path.read_text(encoding="utf-8"))
        except Timeout as e:
            raise StoreUnavailableError(f"Lock timeout ({self.lock_timeout}s) on {self.path}") from e

        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not hold a JSON array")
        return data

    def load_or_seed(self, seed: list[dict[str, Any]]) -> Optional[list[dict[str, Any]]]:
        """
        Load the document at startup, writing ``seed`` when it does not exist.

        Returns:
            The loaded (or seeded) collection, or None when loading failed
        """
        try:
            self._ensure_data_dir()
            if self.exists():
                collection = self.read()
                logger.info(f"Loaded {len(collection)} {self.label} from {self.path}")
                return collection

            collection = copy.deepcopy(seed)
            with self._lock():
                self._write(collection)
            logger.info(f"Initialized {self.path} with {len(collection)} {self.label}")
            return collection

        except Timeout:
            logger.error(f"Lock timeout ({self.lock_timeout}s) loading {self.label}")
        except Exception as e:
            logger.error(f"Error loading {self.label}: {e}")
        return None

    def save(self, collection: list[dict[str, Any]]) -> bool:
        """Overwrite the document with the full collection."""
        try:
            self._ensure_data_dir()
            with self._lock():
                self._write(collection)
            logger.info(f"{self.label.capitalize()} saved successfully")
            return True

        except Timeout:
            logger.error(f"Lock timeout ({self.lock_timeout}s) saving {self.label}")
        except Exception as e:
            logger.error(f"Error saving {self.label}: {e}")
        return False


class JsonCounter:
    """
    Lock-guarded ``{"nextId": N}`` sidecar document.

    Keeps an id sequence across restarts even when the entry holding the
    highest id has been deleted from the collection.
    """

    def __init__(self, path: Path, lock_timeout: float = 10):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout

    def __repr__(self) -> str:
        return f"JsonCounter({str(self.path)!r})"

    def load(self) -> Optional[int]:
        """Return the stored next id, or None when absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            with FileLock(str(self.lock_path), timeout=self.lock_timeout):
                data = json.loads(self.path.read_text(encoding="utf-8"))
            return int(data["nextId"])
        except Timeout:
            logger.error(f"Lock timeout ({self.lock_timeout}s) reading {self.path}")
        except Exception as e:
            logger.error(f"Error reading counter {self.path}: {e}")
        return None

    def save(self, next_id: int) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with FileLock(str(self.lock_path), timeout=self.lock_timeout):
                self.path.write_text(json.dumps({"nextId": next_id}, indent=2), encoding="utf-8")
            return True
        except Timeout:
            logger.error(f"Lock timeout ({self.lock_timeout}s) saving {self.path}")
        except Exception as e:
            logger.error(f"Error saving counter {self.path}: {e}")
        return False


def next_numeric_id(collection: list[dict[str, Any]]) -> int:
    """
    Return ``max(numeric ids) + 1``, or 1 when no id parses as an integer.

    Ids are strings; entries whose id is missing or not an integer are
    ignored rather than poisoning the counter.
    """
    highest = 0
    for entry in collection:
        try:
            value = int(str(entry.get("id")).strip())
        except (AttributeError, TypeError, ValueError):
            continue
        highest = max(highest, value)
    return highest + 1
