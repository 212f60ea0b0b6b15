"""Transform options and their ``pyproject.toml`` loader."""

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from tagjsx.compiler.codegen.generator import IDENTIFIER_RE

logger = logging.getLogger(__name__)

CONFIG_FILE = "pyproject.toml"
CONFIG_TABLE = "tagjsx"


@dataclass(frozen=True)
class TransformOptions:
    """Options shared by the transformer, the build and the CLI.

    Attributes:
        receiver: Name of the rendering context variable in generated code.
        inject_receiver: Declare ``const <receiver> = this;`` in methods
            that contain JSX.
        root_accessor: Address outermost units as ``part("root")``.
        extensions: File suffixes compiled by directory builds.
    """

    receiver: str = "self"
    inject_receiver: bool = True
    root_accessor: bool = False
    extensions: Tuple[str, ...] = (".jsx", ".js")

    def __post_init__(self) -> None:
        if not IDENTIFIER_RE.match(self.receiver):
            raise ValueError(f"Receiver must be a JavaScript identifier, got {self.receiver!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransformOptions":
        """Build options from a config table; keys may use dashes."""
        fields = {f.name for f in dataclasses.fields(cls)}
        values = {}
        for raw_key, value in data.items():
            key = raw_key.replace("-", "_")
            if key not in fields:
                raise ValueError(f"Unknown tagjsx option: {raw_key!r}")
            if key == "extensions":
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise ValueError("'extensions' must be a list of file suffixes")
                value = tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)
            elif key in ("inject_receiver", "root_accessor") and not isinstance(value, bool):
                raise ValueError(f"{raw_key!r} must be a boolean")
            elif key == "receiver" and not isinstance(value, str):
                raise ValueError("'receiver' must be a string")
            values[key] = value
        return cls(**values)

    def merged(self, **overrides: Any) -> "TransformOptions":
        """Copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Nearest ``pyproject.toml`` at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_options(start: Optional[Path] = None) -> TransformOptions:
    """Read ``[tool.tagjsx]`` from the nearest project file, or use defaults."""
    path = find_config_file(start)
    if path is None:
        return TransformOptions()

    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid configuration file {path}: {exc}") from exc

    table = payload.get("tool", {}).get(CONFIG_TABLE)
    if table is None:
        return TransformOptions()

    logger.debug("Loaded tagjsx options from %s", path)
    return TransformOptions.from_mapping(table)
