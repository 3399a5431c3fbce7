"""
Error types raised by the generator, each mapped to a process exit code.
"""

from typing import Iterable


class DockerfileGenError(Exception):
    """Base class for all generator errors."""

    exit_code = 1


class UsageError(DockerfileGenError):
    """Malformed invocation: unknown flag, stray argument or missing --lang."""

    exit_code = 2


class UnsupportedLanguage(DockerfileGenError):
    """The requested language has no template."""

    exit_code = 1

    def __init__(self, language: str, supported: Iterable[str]):
        self.language = language
        self.supported = list(supported)
        super().__init__(f"unsupported language: {language}")

    @property
    def hint(self) -> str:
        return f"Supported: {', '.join(self.supported)}"


class ValidationFailure(DockerfileGenError):
    """The self-check did not find the expected output."""

    exit_code = 1
