"""
Tests for the command line surface: exit codes and the stdout/stderr contract.
"""

import io
import logging

import pytest

from dockerfile_generator.cli import HELP_TEXT, execute, main, parse_arguments
from dockerfile_generator.errors import UsageError


def test_generate_node(capsys):
    assert execute(["--lang", "node"]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("# ---- Build Stage ----\nFROM node:20-alpine AS builder\n")
    assert captured.err == "OK: generated Dockerfile for node\n"


def test_alias_reported_as_typed(capsys):
    assert execute(["--lang", "golang", "--version", "1.21", "--port", "9000"]) == 0
    captured = capsys.readouterr()
    assert "FROM golang:1.21-alpine AS builder" in captured.out
    assert "EXPOSE 9000" in captured.out
    assert captured.err == "OK: generated Dockerfile for golang\n"


def test_equals_syntax(capsys):
    assert execute(["--lang=python", "--port=5000"]) == 0
    assert "EXPOSE 5000" in capsys.readouterr().out


def test_dockerignore_appended(capsys):
    assert execute(["--lang", "python", "--dockerignore"]) == 0
    out = capsys.readouterr().out
    dockerfile, marker, block = out.partition('\n\n# --- .dockerignore ---\n')
    assert marker
    assert dockerfile.endswith('CMD ["python", "app.py"]')
    assert "__pycache__" in block.splitlines()


def test_dockerignore_fallback_for_rust(capsys):
    assert execute(["--lang", "rust", "--dockerignore"]) == 0
    block = capsys.readouterr().out.split("# --- .dockerignore ---\n")[1]
    assert "target" not in block
    assert "README.md" in block.splitlines()


def test_no_dockerignore_by_default(capsys):
    assert execute(["--lang", "go"]) == 0
    assert ".dockerignore ---" not in capsys.readouterr().out


def test_unsupported_language(capsys):
    assert execute(["--lang", "foo"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ERROR: unsupported language: foo" in captured.err
    assert "node, python, go, rust, java" in captured.err


def test_missing_lang(capsys):
    assert execute([]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "ERROR: --lang is required\n"


@pytest.mark.parametrize("argv, message", [
    (["--lang", "node", "--bogus"], "ERROR: unknown option: --bogus"),
    (["--lang", "node", "extra"], "ERROR: unexpected argument: extra"),
    (["--la", "node"], "ERROR: unknown option: --la"),
])
def test_usage_errors(capsys, argv, message):
    assert execute(argv) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith(message)


def test_flag_without_value(capsys):
    assert execute(["--lang"]) == 2
    assert capsys.readouterr().err.startswith("ERROR: ")


def test_parse_arguments_defaults():
    args = parse_arguments(["--lang", "java"])
    assert args.language == "java"
    assert args.version == "latest"
    assert args.port == "3000"
    assert not args.emit_dockerignore


def test_parse_arguments_requires_lang():
    with pytest.raises(UsageError, match="--lang is required"):
        parse_arguments(["--port", "80"])


def test_help(capsys):
    assert execute(["--help"]) == 0
    captured = capsys.readouterr()
    assert captured.out == HELP_TEXT
    assert captured.out.startswith("Usage: dockerfile-gen --lang LANGUAGE [OPTIONS]")
    assert "Languages: node, python, go, rust, java" in captured.out
    assert captured.err == ""


def test_validate(capsys):
    assert execute(["--validate"]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "Validating dockerfile-gen...",
        "PASS: generates valid Node.js Dockerfile",
        "PASS: generates valid Python Dockerfile",
        "PASS: all checks passed",
    ]


def test_validate_failure(capsys, monkeypatch):
    monkeypatch.setattr("dockerfile_generator.cli._self_invoke", lambda argv: (1, "nothing here"))
    assert execute(["--validate"]) == 1
    captured = capsys.readouterr()
    assert "FAIL: Node.js Dockerfile missing FROM" in captured.out
    assert "FAIL: Python Dockerfile missing FROM" in captured.out
    assert "PASS: all checks passed" not in captured.out
    assert captured.err.startswith("ERROR: self-check failed")


def test_explicit_streams():
    stdout, stderr = io.StringIO(), io.StringIO()
    assert execute(["--lang", "java"], stdout=stdout, stderr=stderr) == 0
    assert "FROM eclipse-temurin:21-jdk-alpine AS builder" in stdout.getvalue()
    assert stderr.getvalue() == "OK: generated Dockerfile for java\n"


def test_main_exits_with_code(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--lang", "cobol"])
    assert exc_info.value.code == 1


def test_version_value_may_start_with_dash(capsys):
    assert execute(["--version", "-rc1", "--lang", "node"]) == 0
    assert "FROM node:-rc1-alpine AS builder" in capsys.readouterr().out


def test_value_flag_takes_next_token_verbatim(capsys):
    assert execute(["--lang", "node", "--port", "--dockerignore"]) == 0
    out = capsys.readouterr().out
    assert "EXPOSE --dockerignore" in out
    assert "# --- .dockerignore ---" not in out


def test_help_ends_the_parse(capsys):
    assert execute(["--help", "--lang"]) == 0
    assert capsys.readouterr().out == HELP_TEXT


def test_unknown_option_before_help(capsys):
    assert execute(["--bogus", "--help"]) == 2
    assert capsys.readouterr().err.startswith("ERROR: unknown option: --bogus")


def test_ok_line_strips_padding(capsys):
    assert execute(["--lang", " node "]) == 0
    assert capsys.readouterr().err == "OK: generated Dockerfile for node\n"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_verbose_logs_pipeline_to_stderr(capsys, restore_root_logger):
    assert execute(["--lang", "node", "--verbose"]) == 0
    captured = capsys.readouterr()
    assert "DEBUG dockerfile_generator.workflow: Resolved node -> node:20 (port 3000)" in captured.err
    assert "Workflow: Dockerfile rendered" in captured.err
    assert captured.err.endswith("OK: generated Dockerfile for node\n")
    assert captured.out.startswith("# ---- Build Stage ----")


def test_quiet_by_default(capsys):
    assert execute(["--lang", "node"]) == 0
    assert capsys.readouterr().err == "OK: generated Dockerfile for node\n"
