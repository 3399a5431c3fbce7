"""
Request models for Dockerfile generation.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from .errors import UnsupportedLanguage

DEFAULT_VERSION = "latest"
DEFAULT_PORT = "3000"


class Language(str, Enum):
    """Canonical language keys, one per template."""

    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"

    @classmethod
    def from_name(cls, name: str) -> "Language":
        """Normalize a user-supplied name, resolving aliases."""
        key = name.strip().lower()
        key = LANGUAGE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedLanguage(name, SUPPORTED_LANGUAGES) from None


LANGUAGE_ALIASES = {
    'nodejs': 'node',
    'golang': 'go',
}

SUPPORTED_LANGUAGES = [language.value for language in Language]


class GenerationRequest(BaseModel):
    """Parsed command line, before defaults are applied."""

    language: str
    version: str = DEFAULT_VERSION
    port: str = DEFAULT_PORT
    emit_dockerignore: bool = False


@dataclass(frozen=True)
class ResolvedRequest:
    """Request with the language normalized and the version pinned."""

    language: Language
    version: str
    port: str
