from __future__ import annotations

from pathlib import Path

import pytest

from iconbuilder.icon_sets import BuildConfig, IconSet, prefix_formatter

ARROW_LEFT = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" class="x">'
    '<path d="M1 2" fill-opacity="0.5"/></svg>'
)
ARROW_LEFT_COPY = '<svg xmlns="http://www.w3.org/2000/svg"><circle r="3"/></svg>'
BELL = '<svg viewBox="0 0 16 16"><g stroke-width="2"><path d="M8 1"/></g></svg>'

MANIFEST_DTS = "export declare const IconsManifest: { id: string }[];\n"


def make_icon_set(icon_id: str = "fa", files: str = "icons/*/*.svg", formatter: str | None = "Fa{name}") -> IconSet:
    return IconSet(
        id=icon_id,
        name="Font Awesome",
        files=files,
        project_url="https://fontawesome.com/",
        license="MIT",
        license_url="https://opensource.org/licenses/MIT",
        formatter=prefix_formatter(formatter) if formatter else None,
    )


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write(tmp_path / "LICENSE_HEADER", "Copyright (c) icon authors\n\n")
    write(tmp_path / "src" / "iconsManifest.d.ts", MANIFEST_DTS)
    write(tmp_path / "icons" / "a" / "arrow-left.svg", ARROW_LEFT)
    write(tmp_path / "icons" / "a" / "bell.svg", BELL)
    write(tmp_path / "icons" / "b" / "arrow-left.svg", ARROW_LEFT_COPY)
    return tmp_path


@pytest.fixture
def config(project: Path) -> BuildConfig:
    return BuildConfig(icon_sets=(make_icon_set(),), root_dir=project)
