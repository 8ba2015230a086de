from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Callable

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _load_project_version(pyproject_path: Path | None = None) -> str:
    """Read ``[project].version`` without importing the server.

    Returns ``0.0.0`` when the file is missing or unreadable.
    """
    import tomllib

    path = pyproject_path or Path(__file__).with_name("pyproject.toml")
    try:
        with path.open("rb") as fh:
            project = tomllib.load(fh).get("project") or {}
    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"

    version = project.get("version")
    return version.strip() if isinstance(version, str) and version.strip() else "0.0.0"


def _print_report(report: dict[str, Any]) -> None:
    checks = report.get("checks") or []
    levels = Counter(check.get("level") for check in checks)

    print(f"Status: {report.get('status', 'unknown')}")
    print(f"Checks: ok={levels['ok']}, warning={levels['warning']}, error={levels['error']}")
    for check in checks:
        print(f"- [{check.get('level', '?')}] {check.get('name', '?')}: {check.get('message', '')}")


def _cmd_doctor(args: argparse.Namespace) -> int:
    try:
        import main as server_main
    except Exception as exc:  # pragma: no cover
        print(f"Failed to import server module for doctor: {exc}", file=sys.stderr)
        return 1

    report = server_main.validate_environment()
    _print_report(report)
    return 1 if report.get("status") == "error" else 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import main as server_main

    server_main.mcp.run(transport=args.transport)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-issues-mcp",
        description="Run or check the GitHub issues MCP server.",
    )
    parser.add_argument("--version", action="store_true", help="Print the server version and exit.")

    commands = parser.add_subparsers(dest="command")

    doctor = commands.add_parser("doctor", help="Check GitHub settings and print a summary.")
    doctor.set_defaults(handler=_cmd_doctor)

    serve = commands.add_parser("serve", help="Run the MCP server.")
    serve.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="MCP transport (default: stdio).",
    )
    serve.set_defaults(handler=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    except SystemExit as exc:
        # argparse exits on --help and usage errors; hand the code back instead.
        return int(exc.code or 0)

    handler: Callable[[argparse.Namespace], int] | None = getattr(args, "handler", None)
    if handler is not None:
        return handler(args)

    if args.version:
        print(_load_project_version())
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
