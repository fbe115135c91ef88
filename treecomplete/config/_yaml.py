from pathlib import Path
from typing import Any

from treecomplete.config._common import TreeFile


class Yaml(TreeFile):
    """YAML tree definition. Requires the ``yaml`` extra (PyYAML)."""

    def _load_config(self, path: Path) -> Any:
        from yaml import safe_load  # pyright: ignore[reportMissingImports]

        with path.open() as f:
            return safe_load(f)
