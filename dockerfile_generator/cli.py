"""
Command line interface for the Dockerfile Generator.

Prints a ready-made multi-stage Dockerfile for one of the supported languages.
"""

import sys
import io
import argparse
import logging
from typing import List, Optional, TextIO, Tuple

from .errors import DockerfileGenError, UnsupportedLanguage, UsageError, ValidationFailure
from .models import DEFAULT_PORT, DEFAULT_VERSION, SUPPORTED_LANGUAGES, GenerationRequest
from .agents.validator import ValidationAgent
from .utils.logging_setup import setup_logging
from .workflow import DockerfileGeneratorWorkflow

PROG = "dockerfile-gen"

HELP_TEXT = f"""\
Usage: {PROG} --lang LANGUAGE [OPTIONS]

Generate optimized Dockerfiles.

Languages: {', '.join(SUPPORTED_LANGUAGES)}

Options:
  --lang LANG       Target language (required)
  --version VER     Base image version (default: {DEFAULT_VERSION})
  --port PORT       Port to expose (default: {DEFAULT_PORT})
  --dockerignore    Also output .dockerignore content
  --validate        Run self-check
  --verbose         Log pipeline steps to stderr
  --help            Show this help
"""

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def create_parser() -> ArgumentParser:
    """Create command line argument parser."""

    parser = ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)

    parser.add_argument("--lang", dest="language")
    parser.add_argument("--version", default=DEFAULT_VERSION)
    parser.add_argument("--port", default=DEFAULT_PORT)
    parser.add_argument("--dockerignore", dest="emit_dockerignore", action="store_true")
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--help", dest="show_help", action="store_true")

    return parser


VALUE_FLAGS = ("--lang", "--version", "--port")
SHORT_CIRCUIT_FLAGS = ("--help", "--validate")


def join_flag_values(argv: List[str]) -> List[str]:
    """Walk argv left to right, binding each value flag to the token after it.

    Values may start with '-' (``--version -rc1``). Tokens after the first
    --help or --validate are dropped, since those flags end the parse.
    """
    joined = []
    tokens = iter(argv)
    for token in tokens:
        if token in SHORT_CIRCUIT_FLAGS:
            joined.append(token)
            break
        if token in VALUE_FLAGS:
            value = next(tokens, None)
            joined.append(token if value is None else f"{token}={value}")
            continue
        joined.append(token)
    return joined


def parse_arguments(argv: List[str]) -> argparse.Namespace:
    """Parse argv; --help and --validate skip the --lang check."""

    args, extras = create_parser().parse_known_args(join_flag_values(argv))

    for extra in extras:
        if extra.startswith("-"):
            raise UsageError(f"unknown option: {extra}")
        raise UsageError(f"unexpected argument: {extra}")

    if args.show_help or args.validate:
        return args

    if not args.language:
        raise UsageError("--lang is required")

    return args


def build_request(args: argparse.Namespace) -> GenerationRequest:
    return GenerationRequest(
        language=args.language,
        version=args.version,
        port=args.port,
        emit_dockerignore=args.emit_dockerignore
    )


def generate(request: GenerationRequest, stdout: TextIO, stderr: TextIO, verbose: bool = False) -> int:
    """Render the Dockerfile and write it out in a single write."""

    workflow = DockerfileGeneratorWorkflow(verbose=verbose)
    result = workflow.run(request)

    stdout.write(result.output())
    print(f"OK: generated Dockerfile for {result.language}", file=stderr)
    return 0


def _self_invoke(argv: List[str]) -> Tuple[int, str]:
    """Run the generator in-process, capturing stdout and stderr together."""
    buffer = io.StringIO()
    exit_code = execute(argv, stdout=buffer, stderr=buffer)
    return exit_code, buffer.getvalue()


def run_validation(stdout: TextIO) -> int:
    """Run the self-check and print PASS/FAIL per check."""

    print(f"Validating {PROG}...", file=stdout)

    validator = ValidationAgent(invoke=_self_invoke)
    result = validator.validate()

    for test in result.test_results:
        if test.passed:
            print(f"PASS: generates valid {test.test_name} Dockerfile", file=stdout)
        else:
            print(f"FAIL: {test.test_name} Dockerfile missing FROM", file=stdout)
            logger.debug("Self-check output for %s:\n%s", test.test_name, test.output)

    if not result.passed:
        raise ValidationFailure(result.error)

    print("PASS: all checks passed", file=stdout)
    return 0


def execute(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None,
            stderr: Optional[TextIO] = None) -> int:
    """Run one invocation and return its exit code."""

    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    argv = sys.argv[1:] if argv is None else argv

    try:
        args = parse_arguments(argv)

        if args.verbose:
            setup_logging(logging.DEBUG)

        if args.show_help:
            stdout.write(HELP_TEXT)
            return 0

        if args.validate:
            return run_validation(stdout)

        return generate(build_request(args), stdout, stderr, verbose=args.verbose)

    except UnsupportedLanguage as e:
        print(f"ERROR: {e}", file=stderr)
        print(e.hint, file=stderr)
        return e.exit_code

    except DockerfileGenError as e:
        print(f"ERROR: {e}", file=stderr)
        return e.exit_code


def main(argv: Optional[List[str]] = None):
    """Main entry point."""

    try:
        sys.exit(execute(argv))

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
