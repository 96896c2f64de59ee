"""JSON file access returning Result types.

Reads must yield a JSON object; writes go through a sibling ``.tmp`` file
that is renamed over the target.
"""

import json
import logging
from pathlib import Path
from typing import Any

from taskpie.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class JsonStorage:
    """Reads and writes JSON objects on disk.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("tasks.json"))
        if isinstance(result, Err):
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], str]:
        """Read the JSON object stored at ``path``.

        Returns:
            Ok(dict) with the parsed object, or Err(str) describing why the
            file is missing, unreadable or not a JSON object.
        """
        if not path.exists():
            return Err(f"File not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

        if not isinstance(data, dict):
            return Err(f"Expected a JSON object in {path}")
        logger.debug(f"Loaded {path}")
        return Ok(data)

    def save_json(self, path: Path, data: dict[str, Any], indent: int = 2) -> Result[None, str]:
        """Write ``data`` to ``path``, creating parent directories as needed."""
        try:
            content = json.dumps(data, indent=indent)
        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(path)
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")

        logger.debug(f"Wrote {len(content)} bytes to {path}")
        return Ok(None)
