"""CLI for orgmarkup - format Org inline markup."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any, Callable

from . import __version__
from .adapters.renderers import HtmlRenderer, PlainTextRenderer
from .adapters.yaml_codec import JsonBufferCodec, YamlBufferCodec
from .core.model import Buffer
from .runtime import Runtime, build_runtime


def _renderer(fmt: str) -> Callable[[Buffer], str]:
    renderers: dict[str, Callable[[Buffer], str]] = {
        "text": PlainTextRenderer().render,
        "html": HtmlRenderer().render,
        "yaml": YamlBufferCodec().encode,
        "json": JsonBufferCodec().encode,
    }
    return renderers[fmt]


def _output_format(args: argparse.Namespace) -> str:
    return "json" if args.json else args.format


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def cmd_render(args: argparse.Namespace, rt: Runtime) -> int:
    """Format a file (or stdin) and print it."""
    if args.file != "-" and not Path(args.file).exists():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1

    config = rt.format_config(
        style=False if args.no_style else None,
        with_marks=True if args.with_marks else None,
        linkify=False if args.no_linkify else None,
    )
    buffer = rt.format(_read_input(args.file), config, unfold=args.unfold)

    output = _renderer(_output_format(args))(buffer)
    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def cmd_resolve(args: argparse.Namespace, rt: Runtime) -> int:
    """Print the note that a property link points to."""
    paths = rt.properties.notes_with_property(args.name, args.value)

    if args.json:
        print(json.dumps({
            "name": args.name,
            "value": args.value,
            "paths": [str(p) for p in paths],
        }))
        return 0 if paths else 1

    if not paths:
        print(f"No note with {args.name} = {args.value}", file=sys.stderr)
        return 1

    for path in paths:
        print(path)
    if len(paths) > 1 and not args.quiet:
        print(f"Warning: {len(paths)} notes share {args.name} = {args.value}", file=sys.stderr)
    return 0


def cmd_watch(args: argparse.Namespace, rt: Runtime) -> int:
    """Re-render a file whenever it changes."""
    from .watch import watch_file

    return watch_file(
        path=Path(args.file),
        runtime=rt,
        render=_renderer(args.format),
        debounce_ms=args.debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
        unfold=args.unfold,
    )


def cmd_serve(args: argparse.Namespace, rt: Runtime) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install orgmarkup[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token: str | None
    if args.token == "auto":
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif args.token == "none":
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = args.token

    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Starting server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def version_string() -> str:
    return (
        f"orgmarkup {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgmark", description="Format Org inline markup"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/orgmarkup.toml, notes/orgmarkup.toml)",
    )
    parser.add_argument(
        "--notes",
        type=Path,
        default=None,
        help="Notes directory for property links (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging to stderr"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # render command
    parser_render = subparsers.add_parser("render", help="Format a file and print it")
    parser_render.add_argument("file", help="Org file, or - for stdin")
    parser_render.add_argument(
        "--format", choices=["text", "html", "yaml", "json"], default="text",
        help="Output format (default: text)"
    )
    parser_render.add_argument(
        "--no-style", action="store_true", help="Leave emphasis markup alone"
    )
    parser_render.add_argument(
        "--with-marks", action="store_true", help="Keep emphasis markers in the output"
    )
    parser_render.add_argument(
        "--no-linkify", action="store_true", help="Do not create link tags"
    )
    parser_render.add_argument(
        "--unfold", action="store_true", help="Show drawers unfolded"
    )

    # resolve command
    parser_resolve = subparsers.add_parser(
        "resolve", help="Find the note a property link points to"
    )
    parser_resolve.add_argument("name", help="Property name (CUSTOM_ID or ID)")
    parser_resolve.add_argument("value", help="Property value")

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Re-render a file on every change")
    parser_watch.add_argument("file", help="Org file to watch")
    parser_watch.add_argument(
        "--format", choices=["text", "html", "yaml", "json"], default="text",
        help="Output format (default: text)"
    )
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )
    parser_watch.add_argument(
        "--unfold", action="store_true", help="Show drawers unfolded"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser_serve.add_argument("--port", type=int, default=8765, help="Port")
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token: auto (generate), none (disable), or a literal token"
    )
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    rt = build_runtime(notes_path=args.notes, config_path=args.config)

    handlers: dict[str, Callable[[argparse.Namespace, Any], int]] = {
        "render": cmd_render,
        "resolve": cmd_resolve,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
