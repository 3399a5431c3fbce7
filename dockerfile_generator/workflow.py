"""
Main LangGraph workflow for Dockerfile generation.
"""

from typing import List, Optional
from dataclasses import dataclass
import logging

from langgraph.graph import StateGraph, END
from pydantic import BaseModel

from .agents.dockerfile_generator import DockerfileGenerator
from .agents.dockerignore import append_dockerignore, render_dockerignore
from .models import GenerationRequest, ResolvedRequest

# Define the workflow state
class WorkflowState(BaseModel):
    request: GenerationRequest

    # Resolution results
    resolved: Optional[ResolvedRequest] = None

    # Generated content
    dockerfile: Optional[str] = None
    dockerignore: Optional[str] = None

    # Workflow control
    completed: bool = False
    messages: List[str] = []

@dataclass
class WorkflowResult:
    language: str
    dockerfile: str
    dockerignore: Optional[str] = None

    def output(self) -> str:
        """Text written to standard output."""
        if self.dockerignore is None:
            return self.dockerfile
        return append_dockerignore(self.dockerfile, self.dockerignore)

class DockerfileGeneratorWorkflow:
    """Pipeline orchestrator using LangGraph: resolve, render, optional dockerignore."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

        self.dockerfile_generator = DockerfileGenerator()

        # Build the workflow graph
        self.graph = self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow."""

        workflow = StateGraph(WorkflowState)

        # Add nodes
        workflow.add_node("resolve", self._resolve_request)
        workflow.add_node("render", self._render_dockerfile)
        workflow.add_node("dockerignore", self._render_dockerignore)
        workflow.add_node("complete", self._complete_workflow)

        # Define the workflow edges
        workflow.set_entry_point("resolve")

        workflow.add_edge("resolve", "render")

        workflow.add_conditional_edges(
            "render",
            self._should_emit_dockerignore,
            {
                "dockerignore": "dockerignore",
                "complete": "complete"
            }
        )

        workflow.add_edge("dockerignore", "complete")
        workflow.add_edge("complete", END)

        return workflow.compile()

    def _resolve_request(self, state: WorkflowState) -> dict:
        """Normalize the language and apply default versions."""
        resolved = self.dockerfile_generator.resolve_defaults(state.request)
        self.logger.debug(
            "Resolved %s -> %s:%s (port %s)",
            state.request.language, resolved.language.value, resolved.version, resolved.port
        )
        return {
            "resolved": resolved,
            "messages": state.messages + [f"Resolved language: {resolved.language.value}"]
        }

    def _render_dockerfile(self, state: WorkflowState) -> dict:
        """Render the Dockerfile from the fixed template."""
        dockerfile = self.dockerfile_generator.render(state.resolved)
        self.logger.debug("Rendered %d-line Dockerfile", dockerfile.count("\n"))
        return {
            "dockerfile": dockerfile,
            "messages": state.messages + ["Dockerfile rendered"]
        }

    def _render_dockerignore(self, state: WorkflowState) -> dict:
        """Render the companion .dockerignore block."""
        dockerignore = render_dockerignore(state.resolved.language)
        return {
            "dockerignore": dockerignore,
            "messages": state.messages + [".dockerignore rendered"]
        }

    def _complete_workflow(self, state: WorkflowState) -> dict:
        """Complete the workflow."""
        return {
            "completed": True,
            "messages": state.messages + ["Workflow completed successfully"]
        }

    def _should_emit_dockerignore(self, state: WorkflowState) -> str:
        """Decide whether the .dockerignore block is rendered."""
        if state.request.emit_dockerignore:
            return "dockerignore"
        return "complete"

    def run(self, request: GenerationRequest) -> WorkflowResult:
        """Run the complete workflow synchronously.

        Generator errors raised by a node propagate unchanged, so nothing is
        returned for a request that cannot be rendered.
        """
        final_state = self.graph.invoke({"request": request})

        # LangGraph returns AddableValuesDict, access as dictionary
        if self.verbose:
            for message in final_state.get("messages", []):
                self.logger.debug("Workflow: %s", message)

        return WorkflowResult(
            language=request.language.strip(),
            dockerfile=final_state["dockerfile"],
            dockerignore=final_state.get("dockerignore")
        )
