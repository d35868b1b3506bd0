from __future__ import annotations

import json
from pathlib import Path

import pytest

from iconbuilder.manifest import (
    ManifestError,
    manifest_entries,
    render_license,
    render_manifest,
    write_license,
    write_manifest,
)
from iconbuilder.output import OutputDir
from tests.conftest import MANIFEST_DTS, make_icon_set, write

FA_ENTRY = {
    "id": "fa",
    "name": "Font Awesome",
    "projectUrl": "https://fontawesome.com/",
    "license": "MIT",
    "licenseUrl": "https://opensource.org/licenses/MIT",
}


def test_manifest_entries_project_metadata_only() -> None:
    assert manifest_entries([make_icon_set()]) == [FA_ENTRY]


def test_render_manifest() -> None:
    manifest = render_manifest([make_icon_set()])
    prefix = "export const IconsManifest = "
    assert manifest.module.startswith(prefix)
    assert json.loads(manifest.module[len(prefix) :]) == [FA_ENTRY]
    assert manifest.common == manifest.module.replace(prefix, "module.exports.IconsManifest = ")
    assert '\n  {\n    "id": "fa",\n' in manifest.module
    assert "files" not in manifest.module
    assert "formatter" not in manifest.module


def test_write_manifest(tmp_path: Path) -> None:
    template = write(tmp_path / "src" / "iconsManifest.d.ts", MANIFEST_DTS)
    out = OutputDir(tmp_path / "lib")
    out.mkdir()

    write_manifest(out, [make_icon_set()], template)

    assert (tmp_path / "lib" / "iconsManifest.d.ts").read_text(encoding="utf-8") == MANIFEST_DTS
    assert (tmp_path / "lib" / "iconsManifest.js").read_text(encoding="utf-8").startswith("module.exports.")
    assert (tmp_path / "lib" / "iconsManifest.mjs").read_text(encoding="utf-8").startswith("export const ")


def test_write_manifest_requires_template(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="template not found"):
        write_manifest(OutputDir(tmp_path), [make_icon_set()], tmp_path / "missing.d.ts")


def test_render_license() -> None:
    text = render_license([make_icon_set("fa"), make_icon_set("fa2")])
    paragraph = "Font Awesome - https://fontawesome.com/\nLicense: MIT https://opensource.org/licenses/MIT"
    assert text == f"{paragraph}\n\n{paragraph}\n"


def test_write_license_appends_to_header(tmp_path: Path) -> None:
    header = write(tmp_path / "LICENSE_HEADER", "HEADER\n\n")
    destination = tmp_path / "LICENSE"
    destination.write_text("stale", encoding="utf-8")

    write_license(header, destination, [make_icon_set()])

    assert destination.read_text(encoding="utf-8") == "HEADER\n\n" + render_license([make_icon_set()])


def test_write_license_requires_header(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        write_license(tmp_path / "nope", tmp_path / "LICENSE", [])
