"""
Dockerignore Agent - Companion ignore patterns for the generated Dockerfile.
"""

from typing import Dict

from ..models import Language

DOCKERIGNORE_MARKER = "# --- .dockerignore ---"

_NODE_IGNORE = """\
node_modules
npm-debug.log
.git
.gitignore
.env
.env.*
Dockerfile
docker-compose*
.dockerignore
README.md
.vscode
.idea
coverage
.nyc_output
"""

_PYTHON_IGNORE = """\
__pycache__
*.pyc
*.pyo
.git
.gitignore
.env
.env.*
Dockerfile
docker-compose*
.dockerignore
venv
.venv
.pytest_cache
.mypy_cache
"""

_GO_IGNORE = """\
.git
.gitignore
.env
Dockerfile
docker-compose*
.dockerignore
vendor
*.test
README.md
"""

# Rust and Java have no language-specific entries
GENERIC_IGNORE = """\
.git
.gitignore
.env
Dockerfile
docker-compose*
.dockerignore
README.md
"""

IGNORE_PATTERNS: Dict[Language, str] = {
    Language.NODE: _NODE_IGNORE,
    Language.PYTHON: _PYTHON_IGNORE,
    Language.GO: _GO_IGNORE,
}


def render_dockerignore(language: Language) -> str:
    """Return the .dockerignore block for a language."""
    return IGNORE_PATTERNS.get(language, GENERIC_IGNORE)


def append_dockerignore(dockerfile: str, dockerignore: str) -> str:
    """Join a Dockerfile and its ignore block the way they are printed."""
    return f"{dockerfile}\n{DOCKERIGNORE_MARKER}\n{dockerignore}"
