"""
cli.py

Responsibility: CLI entrypoint for iconbuilder.

High-level flow (single command `build`):
1) Load icon-set config -> `BuildConfig`
2) Apply CLI overrides
3) Run the build

Failures are logged with their traceback and, unless `--strict` is given, do
not change the exit status.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from iconbuilder.build import build
from iconbuilder.icon_sets import load_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def build_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config_path, root_dir=args.root)
    if args.out:
        config = dataclasses.replace(config, output_dir=Path(args.out))

    result = build(config)
    logger.info("Emitted %d icons across %d icon sets", result.emitted, len(result.icon_sets))
    print("done")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="iconbuilder", description="Generate icon modules from SVG icon sets")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Generate modules, manifest and LICENSE for every icon set")
    b.add_argument("config_path", nargs="?", default="icons.yml", help="Icon-set config (default: icons.yml)")
    b.add_argument("--root", default=None, help="Directory globs and relative paths resolve from (default: cwd)")
    b.add_argument("--out", default=None, help="Output directory (overrides config output_dir)")
    b.add_argument("-v", "--verbose", action="store_true", help="Log per-file detail")
    b.add_argument("--strict", action="store_true", help="Exit with status 1 when the build fails")

    b.set_defaults(func=build_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except Exception:  # noqa: BLE001 - every failure is reported the same way
        logger.exception("Build failed")
        return 1 if args.strict else 0


if __name__ == "__main__":
    raise SystemExit(main())
