"""Thin CLI entry point — loads a Manifest and calls the engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from splicer.engine import apply_manifest
from splicer.models import seconds
from splicer.manifest import load_manifest


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="splicer",
        description="Splicer — non-destructive trimming timeline with undo/redo.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log each edit")
    sub = parser.add_subparsers(dest="command")

    apply_cmd = sub.add_parser("apply", help="Replay an edit manifest and print the kept ranges")
    apply_cmd.add_argument("manifest", type=Path, help="Path to a JSON manifest file")
    apply_cmd.add_argument("--max-depth", type=int, help="Override the undo history depth")
    apply_cmd.add_argument("--json", action="store_true", help="Print the resulting project as JSON")

    serve = sub.add_parser("serve", help="Launch the editing API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--max-depth", type=int, help="Undo history depth per session")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from splicer.web import create_app
        web_app = create_app(max_depth=args.max_depth)
        print(f"Splicer API: http://{args.host}:{args.port}")
        web_app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        m = load_manifest(args.manifest)
        if args.max_depth is not None:
            m.history.max_depth = args.max_depth
        result = apply_manifest(m)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        snap = result.snapshot
        print(json.dumps({
            "source_duration": seconds(snap["source_duration"]),
            "segments": [[seconds(start), seconds(end)] for start, end in snap["segments"]],
        }, indent=2))
        return

    print(f"Kept segments ({len(result.segments)}):")
    for seg in result.segments:
        print(f"  {seconds(seg.start):.3f}s - {seconds(seg.end):.3f}s  ({seconds(seg.length):.3f}s)")
    print()
    print(f"  Duration: {seconds(result.duration_original):.1f}s -> {seconds(result.duration_final):.1f}s")
    if result.deletions_applied:
        print(f"  Deletions applied: {result.deletions_applied}")
    if result.can_redo:
        print("  (undone edits remain on the redo stack)")
