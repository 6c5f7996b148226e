"""JSON file storage with Result-based error handling.

A thin wrapper around file I/O for JSON documents, returning Result types
instead of raising exceptions. Writes go through a temporary file and an
atomic rename so a reader never sees a half-written document.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from petnote.domain.shared import Err, Ok, PersistenceError, Result


class JsonStorage:
    """Low-level JSON file I/O with Result-based error handling.

    This class holds no domain logic, only file I/O.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("data/user/abc.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[dict[str, Any] | None, PersistenceError]:
        """Load a JSON document.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(dict), Ok(None) if the file does not exist, or
            Err(PersistenceError) if it cannot be read or parsed.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Ok(None)
        except PermissionError:
            return Err(PersistenceError(f"Permission denied reading {path}"))
        except OSError as e:
            return Err(PersistenceError(f"Error reading {path}: {e}"))

        try:
            return Ok(json.loads(content))
        except json.JSONDecodeError as e:
            return Err(PersistenceError(f"Invalid JSON in {path}: {e}"))

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, PersistenceError]:
        """Atomically write a JSON document.

        Args:
            path: Path to the JSON file to write.
            data: Dictionary to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(PersistenceError) otherwise.
        """
        try:
            content = json.dumps(data, indent=indent)
        except TypeError as e:
            return Err(PersistenceError(f"Data not JSON serializable: {e}"))

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
            return Ok(None)

        except PermissionError:
            return Err(PersistenceError(f"Permission denied writing {path}"))
        except OSError as e:
            return Err(PersistenceError(f"Error writing {path}: {e}"))
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def delete_json(self, path: Path) -> Result[None, PersistenceError]:
        """Delete a JSON document. A missing file is not an error."""
        try:
            path.unlink(missing_ok=True)
            return Ok(None)
        except PermissionError:
            return Err(PersistenceError(f"Permission denied deleting {path}"))
        except OSError as e:
            return Err(PersistenceError(f"Error deleting {path}: {e}"))
