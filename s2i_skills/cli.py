from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path

from s2i_skills.commands import build, doctor
from s2i_skills.strategies.factory import strategy_names

CommandHandler = Callable[[argparse.Namespace], int]

LOG_FORMAT = "[s2i] %(levelname)s %(name)s: %(message)s"


def _add_json_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the run summary JSON to stdout.",
    )


def _add_docker_host_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--docker-host",
        default=None,
        help="Docker daemon URL (default: $S2I_DOCKER_HOST, then the Docker environment).",
    )


def _configure_build_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Local source directory or git clone spec")
    parser.add_argument("base_image", help="Base image carrying ONBUILD instructions")
    parser.add_argument("tag", help="Name for the produced image")
    parser.add_argument("--ref", default=None, help="Git ref to checkout after cloning")
    parser.add_argument(
        "--strategy",
        default="onbuild",
        choices=strategy_names(),
        help="Build strategy (default: onbuild)",
    )
    parser.add_argument("--force-pull", action="store_true", help="Always pull the base image")
    parser.add_argument(
        "--preserve-working-dir",
        action="store_true",
        help="Keep the temporary working directory after the build.",
    )
    parser.add_argument("--report", default=None, help="Write the run summary JSON to this path")
    parser.add_argument(
        "--orchestrator",
        action="store_true",
        help="Machine mode: stdout emits one JSON object only; build output and logs go to stderr.",
    )
    _add_docker_host_arg(parser)
    _add_json_arg(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s2i-build",
        description="Build application images from source and an ONBUILD base image",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_cmd = subparsers.add_parser("build", help="Build an application image")
    _configure_build_parser(build_cmd)

    doctor_cmd = subparsers.add_parser("doctor", help="Check that docker and git are usable")
    _add_docker_host_arg(doctor_cmd)
    _add_json_arg(doctor_cmd)

    return parser


def _build_handlers() -> dict[str, CommandHandler]:
    return {
        "build": build.run,
        "doctor": doctor.run,
    }


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _run_orchestrator(handler: CommandHandler, args: argparse.Namespace) -> int:
    args.json = False
    with tempfile.TemporaryDirectory(prefix="s2i-report-") as tmp:
        if not args.report:
            args.report = str(Path(tmp) / "summary.json")
        report_path = Path(args.report)
        print(f"[s2i] orchestrator mode running `{args.command}`", file=sys.stderr)
        with contextlib.redirect_stdout(sys.stderr):
            exit_code = handler(args)

        if report_path.exists():
            try:
                payload = json.loads(report_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError:
                payload = {
                    "message": "Expected machine output exists but is invalid JSON.",
                    "output_path": str(report_path),
                    "status": "fail",
                }
                exit_code = 1
        else:
            payload = {
                "message": "Expected machine output is missing.",
                "output_path": str(report_path),
                "status": "fail",
            }
            exit_code = 1

    print(json.dumps(payload, indent=2, sort_keys=True))
    return exit_code


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handler = _build_handlers().get(args.command)
    if handler is None:
        parser.error(f"No handler wired for command '{args.command}'")

    if getattr(args, "orchestrator", False):
        return _run_orchestrator(handler, args)
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
