"""
Validation Agent - Self-checks the generator by invoking it and inspecting the output.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

# argv -> (exit code, combined stdout/stderr)
Invoker = Callable[[List[str]], Tuple[int, str]]

@dataclass
class CheckResult:
    """Result of a single self-check."""
    test_name: str
    passed: bool
    output: str
    expected: str
    error: Optional[str] = None

@dataclass
class ValidationResult:
    """Result of validation process."""
    passed: bool
    test_results: List[CheckResult]
    error: Optional[str] = None

@dataclass(frozen=True)
class SelfCheck:
    """One generator invocation and the marker its output must contain."""
    display_name: str
    language: str
    expected: str

DEFAULT_CHECKS = (
    SelfCheck(display_name="Node.js", language="node", expected="FROM node"),
    SelfCheck(display_name="Python", language="python", expected="FROM python"),
)

class ValidationAgent:
    """Validates the generator by running it against known languages."""

    def __init__(self, invoke: Invoker, checks: Sequence[SelfCheck] = DEFAULT_CHECKS):
        self.invoke = invoke
        self.checks = list(checks)

    def validate(self) -> ValidationResult:
        """Run every self-check; all of them must pass."""

        test_results = [self._run_check(check) for check in self.checks]
        passed = all(test.passed for test in test_results)

        error = None
        if not passed:
            failed = [test.test_name for test in test_results if not test.passed]
            error = f"self-check failed: {', '.join(failed)}"

        return ValidationResult(passed=passed, test_results=test_results, error=error)

    def _run_check(self, check: SelfCheck) -> CheckResult:
        exit_code, output = self.invoke(["--lang", check.language])
        passed = check.expected in output

        return CheckResult(
            test_name=check.display_name,
            passed=passed,
            output=output,
            expected=check.expected,
            error=None if passed else f"'{check.expected}' not found in output (exit code {exit_code})"
        )
