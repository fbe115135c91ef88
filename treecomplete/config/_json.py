import json
from pathlib import Path
from typing import Any

from treecomplete.config._common import TreeFile
from treecomplete.exceptions import TreeLoadError


class Json(TreeFile):
    def _load_config(self, path: Path) -> Any:
        with path.open() as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise TreeLoadError(msg=f"JSONDecodeError: {e}", source=self.source) from e
