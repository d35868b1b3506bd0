"""
output.py

Responsibility: The single handle every build step writes generated files through.

All paths are relative to the output root; writes outside it are refused.
Text is written as UTF-8 with "\\n" newlines regardless of platform.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path


class OutputError(RuntimeError):
    pass


@dataclass(frozen=True)
class OutputDir:
    root: Path

    def path(self, *parts: str) -> Path:
        target = self.root.joinpath(*parts).resolve()
        root = self.root.resolve()
        if target != root and root not in target.parents:
            raise OutputError(f"Refusing to write outside {root}: {'/'.join(parts)}")
        return target

    def mkdir(self, *parts: str) -> Path:
        """
        Create a directory; an existing one is fine (re-runs are idempotent).
        """
        target = self.path(*parts)
        target.mkdir(parents=True, exist_ok=True)
        return target

    def write(self, parts: tuple[str, ...] | str, text: str) -> Path:
        target = self.path(*_as_parts(parts))
        with target.open("w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        return target

    def append(self, parts: tuple[str, ...] | str, text: str) -> Path:
        target = self.path(*_as_parts(parts))
        with target.open("a", encoding="utf-8", newline="\n") as f:
            f.write(text)
        return target

    def copy_in(self, source: Path, parts: tuple[str, ...] | str) -> Path:
        """Copy `source` byte-for-byte into the output directory."""
        target = self.path(*_as_parts(parts))
        shutil.copyfile(source, target)
        return target


def _as_parts(parts: tuple[str, ...] | str) -> tuple[str, ...]:
    return (parts,) if isinstance(parts, str) else parts
