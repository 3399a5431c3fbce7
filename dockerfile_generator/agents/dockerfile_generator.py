"""
Dockerfile Generation Agent - Renders fixed multi-stage Dockerfiles per language.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from ..models import GenerationRequest, Language, ResolvedRequest

logger = logging.getLogger(__name__)

HEALTHCHECK_OPTIONS = "--interval=30s --timeout=3s --start-period=5s --retries=3"

# Privilege drop commands
ALPINE_USER = "RUN addgroup -g 1001 appgroup && adduser -u 1001 -G appgroup -s /bin/sh -D appuser"
SYSTEM_USER = "RUN groupadd -r appgroup && useradd -r -g appgroup -s /sbin/nologin appuser"
APP_USER = "appuser"
APP_OWNER = "appuser:appgroup"

WGET_PROBE = "wget --no-verbose --tries=1 --spider http://localhost:{port}"

# Java projects may use either build tool; the first one that succeeds wins
JAVA_BUILD_COMMANDS = (
    "./gradlew bootJar --no-daemon",
    "mvn package -DskipTests",
)
JAVA_BUILD_FALLBACK = 'echo "Build tool not detected"'
JAVA_ARTIFACT_PATHS = (
    "/app/build/libs/*.jar",
    "/app/target/*.jar",
)


def run_first_successful(commands: Sequence[str], otherwise: str) -> str:
    """Chain commands so the first one to succeed ends the RUN step."""
    attempts = [f"{command} 2>/dev/null" for command in commands]
    return "RUN " + " || ".join(attempts + [otherwise])


def copy_first_available(sources: Sequence[str], destination: str) -> Tuple[str, ...]:
    """Chain COPY steps over candidate artifact locations, in order."""
    copies = [
        f"COPY --from=builder --chown={APP_OWNER} {source} {destination}"
        for source in sources
    ]
    return tuple(f"{copy} 2>/dev/null || \\" for copy in copies[:-1]) + (copies[-1],)


@dataclass(frozen=True)
class DockerTemplate:
    """Declarative description of one language's two-stage Dockerfile."""
    language: Language
    builder_image: str
    runtime_image: str
    default_version: Optional[str]
    builder_steps: Tuple[str, ...]
    user_setup: str
    runtime_steps: Tuple[str, ...]
    artifact_steps: Tuple[str, ...]
    healthcheck: str
    entry_command: Tuple[str, ...]


TEMPLATES: Dict[Language, DockerTemplate] = {
    Language.NODE: DockerTemplate(
        language=Language.NODE,
        builder_image="node:{version}-alpine",
        runtime_image="node:{version}-alpine",
        default_version="20",
        builder_steps=(
            "WORKDIR /app",
            "COPY package*.json ./",
            "RUN npm ci --only=production && npm cache clean --force",
            "COPY . .",
            "RUN npm run build --if-present",
        ),
        user_setup=ALPINE_USER,
        runtime_steps=(),
        artifact_steps=(
            f"COPY --from=builder --chown={APP_OWNER} /app/node_modules ./node_modules",
            f"COPY --from=builder --chown={APP_OWNER} /app .",
        ),
        healthcheck=WGET_PROBE + "/health",
        entry_command=("node", "index.js"),
    ),
    Language.PYTHON: DockerTemplate(
        language=Language.PYTHON,
        builder_image="python:{version}-slim",
        runtime_image="python:{version}-slim",
        default_version="3.12",
        builder_steps=(
            "WORKDIR /app",
            "COPY requirements.txt .",
            "RUN pip install --no-cache-dir --prefix=/install -r requirements.txt",
        ),
        user_setup=SYSTEM_USER,
        runtime_steps=(),
        artifact_steps=(
            "COPY --from=builder /install /usr/local",
            f"COPY --chown={APP_OWNER} . .",
        ),
        healthcheck=(
            "python -c \"import urllib.request; "
            "urllib.request.urlopen('http://localhost:{port}/health')\""
        ),
        entry_command=("python", "app.py"),
    ),
    Language.GO: DockerTemplate(
        language=Language.GO,
        builder_image="golang:{version}-alpine",
        runtime_image="alpine:3.19",
        default_version="1.22",
        builder_steps=(
            "RUN apk add --no-cache git",
            "WORKDIR /app",
            "COPY go.mod go.sum ./",
            "RUN go mod download",
            "COPY . .",
            'RUN CGO_ENABLED=0 GOOS=linux go build -ldflags="-s -w" -o /app/server .',
        ),
        user_setup=ALPINE_USER,
        runtime_steps=("RUN apk add --no-cache ca-certificates",),
        artifact_steps=(
            f"COPY --from=builder --chown={APP_OWNER} /app/server .",
        ),
        healthcheck=WGET_PROBE + "/health",
        entry_command=("./server",),
    ),
    # Rust always builds on rust:latest; the version parameter is not used
    Language.RUST: DockerTemplate(
        language=Language.RUST,
        builder_image="rust:latest",
        runtime_image="debian:bookworm-slim",
        default_version=None,
        builder_steps=(
            "WORKDIR /app",
            "COPY Cargo.toml Cargo.lock ./",
            'RUN mkdir src && echo "fn main() {}" > src/main.rs',
            "RUN cargo build --release && rm -rf src",
            "COPY . .",
            "RUN cargo build --release",
        ),
        user_setup=SYSTEM_USER,
        runtime_steps=(
            "RUN apt-get update && apt-get install -y --no-install-recommends "
            "ca-certificates && rm -rf /var/lib/apt/lists/*",
        ),
        artifact_steps=(
            f"COPY --from=builder --chown={APP_OWNER} /app/target/release/app .",
        ),
        healthcheck="curl -f http://localhost:{port}/health",
        entry_command=("./app",),
    ),
    Language.JAVA: DockerTemplate(
        language=Language.JAVA,
        builder_image="eclipse-temurin:{version}-jdk-alpine",
        runtime_image="eclipse-temurin:{version}-jre-alpine",
        default_version="21",
        builder_steps=(
            "WORKDIR /app",
            "COPY . .",
            run_first_successful(JAVA_BUILD_COMMANDS, JAVA_BUILD_FALLBACK),
        ),
        user_setup=ALPINE_USER,
        runtime_steps=(),
        artifact_steps=copy_first_available(JAVA_ARTIFACT_PATHS, "app.jar"),
        healthcheck=WGET_PROBE + "/actuator/health",
        entry_command=("java", "-jar", "app.jar"),
    ),
}


class DockerfileGenerator:
    """Generates Dockerfiles from the fixed per-language templates."""

    TEMPLATES = TEMPLATES

    def get_template(self, language: Language) -> DockerTemplate:
        return self.TEMPLATES[language]

    def resolve_defaults(self, request: GenerationRequest) -> ResolvedRequest:
        """Normalize the language and pin the version when 'latest' was asked for."""
        language = Language.from_name(request.language)
        template = self.get_template(language)

        version = request.version
        if version == "latest" and template.default_version:
            version = template.default_version
            logger.debug("Pinned %s version to %s", language.value, version)

        return ResolvedRequest(language=language, version=version, port=request.port)

    def render(self, resolved: ResolvedRequest) -> str:
        """Render the Dockerfile text for a resolved request."""

        template = self.get_template(resolved.language)
        builder_image = template.builder_image.format(version=resolved.version)
        runtime_image = template.runtime_image.format(version=resolved.version)
        healthcheck = template.healthcheck.format(port=resolved.port)

        lines = [
            "# ---- Build Stage ----",
            f"FROM {builder_image} AS builder",
            *template.builder_steps,
            "",
            "# ---- Production Stage ----",
            f"FROM {runtime_image} AS production",
            template.user_setup,
            *template.runtime_steps,
            "WORKDIR /app",
            *template.artifact_steps,
            f"USER {APP_USER}",
            f"EXPOSE {resolved.port}",
            f"HEALTHCHECK {HEALTHCHECK_OPTIONS} \\",
            f"  CMD {healthcheck} || exit 1",
            f"CMD {json.dumps(list(template.entry_command))}",
        ]

        return "\n".join(lines) + "\n"
