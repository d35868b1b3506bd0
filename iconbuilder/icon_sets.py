"""
icon_sets.py

Responsibility: Load the icon-set configuration into a deterministic, typed model.

The configuration is a YAML document:

    output_dir: lib
    license_header: LICENSE_HEADER
    manifest_declaration: src/iconsManifest.d.ts
    icon_sets:
      - id: fa
        name: Font Awesome
        files: icons/fontawesome/svgs/*/*.svg
        formatter: "Fa{name}"
        project_url: https://fontawesome.com/
        license: CC BY 4.0 License
        license_url: https://creativecommons.org/licenses/by/4.0/

The builder treats the parsed result as the single source of truth.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


class IconSetError(ValueError):
    pass


@dataclass(frozen=True)
class IconSet:
    """One icon family and how to discover and name its members."""

    id: str
    name: str
    files: str
    project_url: str
    license: str
    license_url: str
    formatter: Callable[[str], str] | None = None


@dataclass(frozen=True)
class BuildConfig:
    """Everything a build needs. Relative paths are resolved against `root_dir`."""

    icon_sets: tuple[IconSet, ...]
    root_dir: Path = field(default_factory=Path.cwd)
    output_dir: Path = Path("lib")
    license_header: Path = Path("LICENSE_HEADER")
    license_file: Path = Path("LICENSE")
    manifest_declaration: Path = Path("src/iconsManifest.d.ts")
    ignore_file: Path | None = Path(".gitignore")

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root_dir / path


def prefix_formatter(template: str) -> Callable[[str], str]:
    """
    Turn a format string such as "Fa{name}" into a formatter callable.
    """
    if "{name}" not in template:
        raise IconSetError(f"Formatter must contain '{{name}}': {template!r}")

    def _format(name: str) -> str:
        return template.replace("{name}", name)

    return _format


def _require_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if value is None or not str(value).strip():
        raise IconSetError(f"{where}: `{key}` is required.")
    return str(value).strip()


def parse_icon_set(raw: Any, index: int = 0) -> IconSet:
    where = f"icon_sets[{index}]"
    if not isinstance(raw, dict):
        raise IconSetError(f"{where} must be an object/mapping.")

    formatter_raw = raw.get("formatter")
    formatter = None
    if formatter_raw is not None:
        if not isinstance(formatter_raw, str):
            raise IconSetError(f"{where}: `formatter` must be a string like 'Fa{{name}}'.")
        formatter = prefix_formatter(formatter_raw)

    return IconSet(
        id=_require_str(raw, "id", where),
        name=_require_str(raw, "name", where),
        files=_require_str(raw, "files", where),
        project_url=_require_str(raw, "project_url", where),
        license=_require_str(raw, "license", where),
        license_url=_require_str(raw, "license_url", where),
        formatter=formatter,
    )


def parse_icon_sets(items: Any) -> tuple[IconSet, ...]:
    if not isinstance(items, list):
        raise IconSetError("`icon_sets` must be a list.")

    icon_sets = tuple(parse_icon_set(raw, i) for i, raw in enumerate(items))

    seen: set[str] = set()
    for icon_set in icon_sets:
        if icon_set.id in seen:
            raise IconSetError(f"Duplicate icon set id: {icon_set.id}")
        seen.add(icon_set.id)
    return icon_sets


def _optional_path(data: dict[str, Any], key: str, default: Path | None) -> Path | None:
    if key not in data:
        return default
    value = data[key]
    if value is None:
        return None
    return Path(str(value))


def load_config(config_path: str | Path, *, root_dir: str | Path | None = None) -> BuildConfig:
    """
    Parse a YAML config file into a `BuildConfig`.

    `root_dir` defaults to the current working directory, which is also where
    the `files` glob patterns are resolved from.
    """
    path = Path(config_path)
    if not path.exists():
        raise IconSetError(f"Config file does not exist: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise IconSetError("Config must be a mapping/object at the top level.")

    defaults = BuildConfig(icon_sets=())
    root = Path(root_dir).resolve() if root_dir is not None else Path.cwd()

    return BuildConfig(
        icon_sets=parse_icon_sets(data.get("icon_sets") or []),
        root_dir=root,
        output_dir=_optional_path(data, "output_dir", defaults.output_dir) or defaults.output_dir,
        license_header=_optional_path(data, "license_header", defaults.license_header) or defaults.license_header,
        license_file=_optional_path(data, "license_file", defaults.license_file) or defaults.license_file,
        manifest_declaration=(
            _optional_path(data, "manifest_declaration", defaults.manifest_declaration)
            or defaults.manifest_declaration
        ),
        ignore_file=_optional_path(data, "ignore_file", defaults.ignore_file),
    )
