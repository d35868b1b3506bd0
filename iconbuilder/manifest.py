"""
manifest.py

Responsibility: Icon-set metadata output (the manifest modules and the LICENSE file).

The manifest declaration (`iconsManifest.d.ts`) is copied from a hand-written
template, never generated. When `MANIFEST_FIELDS` changes, that template has
to be updated to match.
"""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from iconbuilder.icon_sets import IconSet
from iconbuilder.output import OutputDir

logger = logging.getLogger(__name__)

MANIFEST_MODULE = "iconsManifest.mjs"
MANIFEST_COMMON = "iconsManifest.js"
MANIFEST_DTS = "iconsManifest.d.ts"

# (output key, IconSet attribute)
MANIFEST_FIELDS = (
    ("id", "id"),
    ("name", "name"),
    ("projectUrl", "project_url"),
    ("license", "license"),
    ("licenseUrl", "license_url"),
)


class ManifestError(RuntimeError):
    pass


@dataclass(frozen=True)
class Manifest:
    module: str
    common: str


def manifest_entries(icon_sets: Sequence[IconSet]) -> list[dict[str, str]]:
    return [{key: getattr(icon_set, attr) for key, attr in MANIFEST_FIELDS} for icon_set in icon_sets]


def render_manifest(icon_sets: Sequence[IconSet]) -> Manifest:
    data = json.dumps(manifest_entries(icon_sets), indent=2, ensure_ascii=False)
    return Manifest(
        module=f"export const IconsManifest = {data}",
        common=f"module.exports.IconsManifest = {data}",
    )


def write_manifest(out: OutputDir, icon_sets: Sequence[IconSet], declaration_template: Path) -> None:
    """
    Write `iconsManifest.mjs` / `iconsManifest.js` and copy the declaration template
    verbatim to `iconsManifest.d.ts`.
    """
    if not declaration_template.is_file():
        raise ManifestError(f"Manifest declaration template not found: {declaration_template}")

    manifest = render_manifest(icon_sets)
    out.write(MANIFEST_MODULE, manifest.module)
    out.write(MANIFEST_COMMON, manifest.common)
    out.copy_in(declaration_template, MANIFEST_DTS)
    logger.debug("Copied %s; its shape is not checked against %s", declaration_template, MANIFEST_MODULE)


def render_license(icon_sets: Sequence[IconSet]) -> str:
    paragraphs = [
        "\n".join(
            [
                f"{icon_set.name} - {icon_set.project_url}",
                f"License: {icon_set.license} {icon_set.license_url}",
            ]
        )
        for icon_set in icon_sets
    ]
    return "\n\n".join(paragraphs) + "\n"


def write_license(header: Path, destination: Path, icon_sets: Sequence[IconSet]) -> None:
    """
    LICENSE = header file contents + one paragraph per icon set.
    """
    if not header.is_file():
        raise ManifestError(f"License header not found: {header}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(header, destination)
    with destination.open("a", encoding="utf-8", newline="\n") as f:
        f.write(render_license(icon_sets))
