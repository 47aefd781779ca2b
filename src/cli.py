from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from src.analysis.diff import DiffEngine, render_report
from src.codec.errors import DecodeError, EncodeError
from src.config_loader import load_tool_config
from src.models.configs import NoteEncoding, ToolConfig
from src.pipeline import OutlinePipeline
from src.render.base import RenderConfig
from src.render.canonical import CanonicalRenderer
from src.render.diagnostic import DumpRenderer, OffsetsRenderer
from src.render.json_tree import JsonTreeRenderer
from src.render.tree_text import IndentedRenderer, PlainRenderer
from src.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otl",
        description="Decode, render, validate and diff binary OTL outline documents.",
    )
    parser.add_argument("file", help="OTL file to read, or '-' for stdin")
    parser.add_argument("--json", action="store_true", help="Print the outline tree as JSON")
    parser.add_argument("--dump", action="store_true", help="Print a per-record table with running levels")
    parser.add_argument("--canon", action="store_true", help="Print the canonical, offset-free record dump")
    parser.add_argument("--offsets", action="store_true", help="Print byte offsets of every record field")
    parser.add_argument("--text", action="store_true", help="Print every heading and note, ignoring fold state")
    parser.add_argument("--validate", action="store_true", help="Check attribute bits against the structure")
    parser.add_argument(
        "--child-hypothesis",
        action="store_true",
        default=None,
        help="With --validate, also test the unconfirmed 0x04 has-child bit",
    )
    parser.add_argument(
        "--show-selection",
        "--show-cursor",
        dest="show_selection",
        action="store_true",
        default=None,
        help="Include the selection bit in canonical output and diffs",
    )
    parser.add_argument(
        "--enc",
        choices=[encoding.value for encoding in NoteEncoding],
        default=None,
        help="Note text encoding (default: latin1)",
    )
    parser.add_argument(
        "--self-test",
        action="store_true",
        default=None,
        help="Re-encode the tree and check the plain rendering survives the round trip",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML, TOML or JSON config file")
    parser.add_argument("--diff", type=Path, metavar="PREV", help="Diff PREV (previous) against FILE (current)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def resolve_config(args: argparse.Namespace) -> ToolConfig:
    settings = get_settings()
    config = settings.to_tool_config()
    config_path = args.config or settings.config_path
    if config_path is not None:
        config = load_tool_config(config_path, base=config)

    overrides = {}
    if args.enc is not None:
        overrides["note_encoding"] = NoteEncoding(args.enc)
    for name in ("show_selection", "child_hypothesis", "self_test"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return config.model_copy(update=overrides) if overrides else config


def _read_input(name: str) -> bytes:
    if name == "-":
        return sys.stdin.buffer.read()
    return Path(name).read_bytes()


def _run(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    pipeline = OutlinePipeline(config)
    render_config = config.render_config()

    if args.diff is not None:
        previous = pipeline.decoder.decode(args.diff.read_bytes())
        current = pipeline.decoder.decode(_read_input(args.file))
        report = DiffEngine(show_selection=config.show_selection).diff(previous, current)
        sys.stdout.write(render_report(report))
        return 0

    result = pipeline.process(_read_input(args.file), validate=args.validate)
    for diagnostic in result.diagnostics:
        print(diagnostic, file=sys.stderr)

    outputs: List[str] = []
    if args.dump:
        outputs.append(DumpRenderer(render_config).render(result.records))
    if args.offsets:
        outputs.append(OffsetsRenderer(render_config).render(result.records))
    if args.canon:
        outputs.append(CanonicalRenderer(render_config).render(result.records))

    record_views_only = bool(outputs) and not (args.json or args.text)
    if not record_views_only:
        outputs.append(_render_tree(args, render_config, result.forest))
    sys.stdout.write("".join(outputs))

    round_trip = result.round_trip
    if round_trip is not None and not round_trip.ok:
        if round_trip.error:
            reason = f"re-encoded output did not decode: {round_trip.error}"
        else:
            reason = f"plain rendering changed after re-encoding ({round_trip.encoded_size} bytes)"
        print(f"self-test failed: {reason}", file=sys.stderr)
        return 1
    return 0


def _render_tree(args: argparse.Namespace, render_config: RenderConfig, forest) -> str:
    if args.json:
        return JsonTreeRenderer(render_config).render(forest)
    if args.text:
        return PlainRenderer(render_config).render(forest)
    return IndentedRenderer(render_config).render(forest)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return _run(args)
    except (DecodeError, EncodeError, OSError, ValueError) as exc:
        print(f"otl: error: {exc}", file=sys.stderr)
        return 1


__all__ = ["build_parser", "main", "resolve_config"]
