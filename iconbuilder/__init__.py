"""
iconbuilder package

This package converts third-party SVG icon sets into importable JavaScript
modules, TypeScript declarations, a metadata manifest and a LICENSE file.

Key responsibilities are split across modules:
- `icon_sets.py`: load the icon-set configuration (YAML) into typed descriptors
- `svg_parser.py`: SVG document -> normalized `ElementNode` tree
- `names.py`: file name -> exported identifier
- `emitter.py`: deterministic rendering of generated rows and file headers
- `manifest.py`: manifest and LICENSE output
- `output.py`: the output-directory handle every step writes through
- `build.py`: orchestration (init -> license -> manifest -> icon sets)
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
