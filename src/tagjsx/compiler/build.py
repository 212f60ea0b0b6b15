"""Directory builds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from tagjsx.compiler.exceptions import JSXCompileError
from tagjsx.compiler.transform import SourceTransformer
from tagjsx.config import TransformOptions

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".js"


@dataclass
class BuildSummary:
    files: int
    errors: List[JSXCompileError] = field(default_factory=list)
    out_dir: Path = Path(".")

    @property
    def ok(self) -> bool:
        return not self.errors


def compile_file(path: Path, options: Optional[TransformOptions] = None) -> str:
    """Compile one file with a fresh fragment counter."""
    source = path.read_text(encoding="utf-8")
    return SourceTransformer(options).transform(source, str(path))


def iter_sources(src_dir: Path, out_dir: Path, options: TransformOptions) -> Iterator[Path]:
    """Source files under ``src_dir``, skipping anything inside ``out_dir``."""
    for path in sorted(src_dir.rglob("*")):
        if not path.is_file() or path.suffix not in options.extensions:
            continue
        if out_dir == path.parent or out_dir in path.parents:
            continue
        yield path


def build_project(
    src_dir: Path,
    out_dir: Path,
    options: Optional[TransformOptions] = None,
) -> BuildSummary:
    """Compile every source file under ``src_dir`` into ``out_dir``.

    Files keep their relative path with a ``.js`` suffix. A file that fails to
    compile is reported in the summary and does not stop the build.
    """
    options = options or TransformOptions()
    src_dir = src_dir.resolve()
    out_dir = out_dir.resolve()
    if not src_dir.is_dir():
        raise ValueError(f"Source directory not found: {src_dir}")

    summary = BuildSummary(files=0, out_dir=out_dir)
    for path in iter_sources(src_dir, out_dir, options):
        try:
            code = compile_file(path, options)
        except JSXCompileError as e:
            logger.error("Failed to compile %s", path)
            summary.errors.append(e)
            continue

        target = (out_dir / path.relative_to(src_dir)).with_suffix(OUTPUT_SUFFIX)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(code, encoding="utf-8")
        summary.files += 1
        logger.info("Compiled %s -> %s", path.relative_to(src_dir), target)

    return summary
