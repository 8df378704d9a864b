from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from build_constants.foundation.logging_utils import setup_logger
from build_constants.framework.errors import BuildConstantsError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="build-constants", add_help=True)
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(command: argparse.ArgumentParser) -> None:
        command.add_argument(
            "--config",
            default=None,
            help="Config YAML path (default: $BUILD_CONSTANTS_CONFIG or config/build_constants.yaml)",
        )
        command.add_argument("--verbose", "-v", action="store_true", help="Log debug details")

    generate = sub.add_parser("generate", help="Write the build constants source file")
    add_common(generate)
    generate.add_argument("--output-dir", default=None, help="Override the configured output directory")

    inputs = sub.add_parser("inputs", help="Print the declared inputs/output as JSON")
    add_common(inputs)
    inputs.add_argument("--output-dir", default=None, help="Override the configured output directory")

    render = sub.add_parser("render", help="Print the generated source without writing it")
    add_common(render)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logger = setup_logger(verbose=args.verbose)

    from .app.generate import inputs_report, plan_generation, render_plan, run_generation

    try:
        plan = plan_generation(config_path=args.config, output_dir=getattr(args, "output_dir", None))

        if args.command == "generate":
            path = run_generation(plan)
            print(f"Wrote {path}")
            return 0

        if args.command == "inputs":
            print(json.dumps(inputs_report(plan), indent=2, sort_keys=True))
            return 0

        if args.command == "render":
            sys.stdout.write(render_plan(plan))
            return 0
    except (BuildConstantsError, ValueError, FileNotFoundError) as exc:
        logger.debug("Generation failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    raise AssertionError(f"Unhandled command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
