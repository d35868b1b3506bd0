"""
build.py

Responsibility: Orchestrate a full build.

High-level flow:
1) Initialize the output directory (per-icon-set files, root barrels, ignore file)
2) Write LICENSE (header + per-icon-set license text)
3) Write the manifest modules
4) Append the root index re-exports
5) For each icon set: discover SVGs -> parse -> resolve name -> append rows

Steps run strictly in sequence. The first exception aborts the rest; nothing
already written is rolled back.
"""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from iconbuilder.emitter import (
    OutputFormat,
    banner,
    emit_barrel_entry,
    emit_icon_row,
    emit_index_exports,
    icon_set_header,
)
from iconbuilder.icon_sets import BuildConfig, IconSet
from iconbuilder.manifest import (
    MANIFEST_COMMON,
    MANIFEST_DTS,
    MANIFEST_MODULE,
    write_license,
    write_manifest,
)
from iconbuilder.names import resolve_name
from iconbuilder.output import OutputDir
from iconbuilder.svg_parser import ElementNode, parse_svg

logger = logging.getLogger(__name__)

INDEX_MODULE = "index.mjs"
INDEX_DTS = "index.d.ts"
ALL_MODULE = "all.mjs"
ALL_DTS = "all.d.ts"

ROOT_FILES = (INDEX_DTS, INDEX_MODULE, ALL_MODULE, ALL_DTS)

IGNORE_BEGIN = "# BEGIN iconbuilder: THIS BLOCK IS AUTO GENERATED\n"
IGNORE_END = "# END iconbuilder\n"


@dataclass(frozen=True)
class ResolvedIcon:
    name: str
    tree: ElementNode
    source: Path


@dataclass(frozen=True)
class IconSetResult:
    id: str
    emitted: int
    skipped: int


@dataclass(frozen=True)
class BuildResult:
    icon_sets: tuple[IconSetResult, ...]

    @property
    def emitted(self) -> int:
        return sum(r.emitted for r in self.icon_sets)


def _relative_to(path: Path, base: Path) -> str | None:
    rel = Path(os.path.relpath(path, base))
    if rel.parts and rel.parts[0] == "..":
        return None
    return rel.as_posix()


def generated_paths(config: BuildConfig, base: Path | None = None) -> list[str]:
    """
    Every path a build writes, relative to `base` (default `root_dir`), in POSIX form.

    Paths outside `base` cannot be matched by an ignore file there and are left out.
    """
    base = base if base is not None else config.root_dir
    out = config.resolve(config.output_dir)
    # (path, suffix); directories get a trailing slash
    candidates = [(out / icon_set.id, "/") for icon_set in config.icon_sets]
    candidates.extend((out / name, "") for name in ROOT_FILES)
    candidates.extend((out / name, "") for name in (MANIFEST_MODULE, MANIFEST_COMMON, MANIFEST_DTS))
    candidates.append((config.resolve(config.license_file), ""))

    paths = []
    for path, suffix in candidates:
        rel = _relative_to(path, base)
        if rel is None:
            logger.debug("Not listing %s in the ignore file: outside %s", path, base)
            continue
        paths.append(rel + suffix)
    return paths


def render_ignore_block(config: BuildConfig, base: Path | None = None) -> str:
    return IGNORE_BEGIN + "".join(f"/{p}\n" for p in generated_paths(config, base)) + IGNORE_END


def merge_ignore_block(existing: str, block: str) -> str:
    """
    Replace the generated block in `existing`, or append it. Other lines are kept as they are.
    """
    start = existing.find(IGNORE_BEGIN)
    if start != -1:
        end = existing.find(IGNORE_END, start)
        if end != -1:
            return existing[:start] + block + existing[end + len(IGNORE_END) :]
    if existing and not existing.endswith("\n"):
        existing += "\n"
    separator = "\n" if existing else ""
    return existing + separator + block


def write_ignore_file(config: BuildConfig, ignore_path: Path) -> None:
    existing = ignore_path.read_text(encoding="utf-8") if ignore_path.is_file() else ""
    block = render_ignore_block(config, ignore_path.parent)
    ignore_path.write_text(merge_ignore_block(existing, block), encoding="utf-8")


def init_output_dir(out: OutputDir, config: BuildConfig) -> None:
    out.mkdir()
    for icon_set in config.icon_sets:
        out.mkdir(icon_set.id)
        for fmt in OutputFormat:
            out.write((icon_set.id, fmt.file_name), icon_set_header(fmt))

    for name in ROOT_FILES:
        out.write(name, banner())

    if config.ignore_file is not None:
        write_ignore_file(config, config.resolve(config.ignore_file))


def write_index_file(out: OutputDir) -> None:
    exports = emit_index_exports()
    out.append(INDEX_MODULE, exports)
    out.append(INDEX_DTS, exports)


def discover_files(icon_set: IconSet, root_dir: Path) -> list[Path]:
    """
    Files matching the icon set's glob, sorted by relative path for stable output.
    """
    if os.path.isabs(icon_set.files):
        matches = glob.glob(icon_set.files, recursive=True)
        paths = [Path(m) for m in matches]
    else:
        matches = glob.glob(icon_set.files, root_dir=root_dir, recursive=True)
        paths = [root_dir / m for m in matches]
    paths = [p for p in paths if p.is_file()]
    paths.sort(key=lambda p: p.as_posix())
    return paths


def iter_icons(icon_set: IconSet, files: Iterable[Path], seen: set[str]) -> Iterator[ResolvedIcon | None]:
    """
    Parse and name each file lazily. The first file to claim a name wins; a
    later file with the same name yields None.
    """
    for path in files:
        tree = parse_svg(path.read_bytes())
        name = resolve_name(path.name, icon_set)
        if name in seen:
            logger.debug("Skipping %s: %s already emitted for %s", path, name, icon_set.id)
            yield None
            continue
        seen.add(name)
        yield ResolvedIcon(name=name, tree=tree, source=path)


def write_icon_set(out: OutputDir, icon_set: IconSet, root_dir: Path) -> IconSetResult:
    files = discover_files(icon_set, root_dir)
    logger.info("%s: %d files match %s", icon_set.id, len(files), icon_set.files)

    entry = emit_barrel_entry(icon_set.id)
    out.append(ALL_MODULE, entry)
    out.append(ALL_DTS, entry)

    emitted = skipped = 0
    for icon in iter_icons(icon_set, files, set()):
        if icon is None:
            skipped += 1
            continue
        for fmt in OutputFormat:
            out.append((icon_set.id, fmt.file_name), emit_icon_row(icon.name, icon.tree, fmt))
        emitted += 1

    return IconSetResult(id=icon_set.id, emitted=emitted, skipped=skipped)


def build(config: BuildConfig) -> BuildResult:
    out = OutputDir(config.resolve(config.output_dir))
    logger.info("Building %d icon sets into %s", len(config.icon_sets), out.root)

    init_output_dir(out, config)
    write_license(
        config.resolve(config.license_header),
        config.resolve(config.license_file),
        config.icon_sets,
    )
    write_manifest(out, config.icon_sets, config.resolve(config.manifest_declaration))
    write_index_file(out)

    results = []
    for icon_set in config.icon_sets:
        result = write_icon_set(out, icon_set, config.root_dir)
        logger.info("%s: emitted %d icons (%d duplicates skipped)", icon_set.id, result.emitted, result.skipped)
        results.append(result)

    return BuildResult(icon_sets=tuple(results))
