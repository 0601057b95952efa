"""CLI entrypoints for cmdcollect commands."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Mapping

from .emitter import DEFAULT_STYLE, STYLES
from .errors import CollectError
from .logging import configure_logging
from .pipeline import Pipeline
from .workspace import PKG_NAME_ENV, manifest_dir_from_env


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_manifest_dir_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--manifest-dir",
        type=Path,
        default=None,
        help="Directory of the crate being built (defaults to $CARGO_MANIFEST_DIR).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdcollect",
        description="Collect annotated command functions across a Cargo workspace.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write diagnostics to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan workspace members and write their command list files.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    _add_manifest_dir_option(scan_parser)
    scan_parser.add_argument(
        "--collect-all",
        action="store_true",
        default=None,
        help="Also collect functions that only carry the command attribute.",
    )
    scan_parser.add_argument(
        "--no-cargo-directives",
        dest="cargo_directives",
        action="store_false",
        help="Do not print cargo:rerun-if-changed lines for workspace members.",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Emit the registration expression from the command list files.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_manifest_dir_option(generate_parser)
    generate_parser.add_argument(
        "--style",
        choices=STYLES,
        default=DEFAULT_STYLE,
        help="Shape of the generated expression.",
    )
    generate_parser.add_argument(
        "--crate",
        dest="calling_crate",
        default=None,
        help="Name of the crate requesting generation (defaults to the workspace package).",
    )
    generate_parser.add_argument(
        "--print",
        dest="print_array",
        action="store_true",
        help="With --style array, print the array at runtime as well.",
    )
    generate_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the expression to this file instead of stdout.",
    )

    return parser


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> None:
    """CLI entrypoint for cmdcollect commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    env = os.environ if environ is None else environ

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        manifest_dir = args.manifest_dir or manifest_dir_from_env(env)
        if args.command == "scan":
            pipeline = Pipeline(collect_all=args.collect_all)
            on_member = _print_rerun_directive if args.cargo_directives else None
            pipeline.run_scan(manifest_dir, on_member=on_member)
        elif args.command == "generate":
            calling_crate = args.calling_crate
            if calling_crate is None and args.style == "array":
                calling_crate = env.get(PKG_NAME_ENV) or "unknown"
            output = Pipeline().run_generate(
                manifest_dir,
                args.style,
                calling_crate=calling_crate,
                print_array=bool(args.print_array),
            )
            if args.output is not None:
                args.output.parent.mkdir(parents=True, exist_ok=True)
                args.output.write_text(output + "\n", encoding="utf-8")
            else:
                print(output)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except CollectError as exc:
        parser.exit(1, f"cmdcollect {args.command} failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"cmdcollect {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _print_rerun_directive(member_path: str) -> None:
    print(f"cargo:rerun-if-changed={member_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
