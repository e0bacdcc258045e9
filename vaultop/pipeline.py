"""A lightweight sequential engine for multi-step secret operations.

A Pipeline is made of named steps. Each step receives a shared State that
later steps can read and change. Execution stops at the first failing
step unless ``continue_on_error`` is set.

The built-in steps (``fetch_step``, ``validate_step``, ``write_step``)
cover the usual fetch, validate, write workflow; any callable taking a
State can be added for auditing, notifications, caching and the like.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from vaultop.provider import Provider
from vaultop.validate import Rule, ValidationError, validate

StepFunc = Callable[["State"], None]


@dataclass
class State:
    """Data shared between the steps of one pipeline run."""

    values: dict[str, str] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Step:
    """A named pipeline step; ``fn`` signals failure by raising."""

    name: str
    fn: StepFunc


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step; ``duration`` is in seconds."""

    step: str
    duration: float
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PipelineError(Exception):
    """Raised when a step fails and the pipeline stops."""

    def __init__(self, step: str, error: Exception, results: list[StepResult]) -> None:
        super().__init__(f'pipeline step "{step}" failed: {error}')
        self.step = step
        self.error = error
        self.results = results


class Pipeline:
    """Runs steps in order, stopping at the first failure by default."""

    def __init__(self, *steps: Step, continue_on_error: bool = False) -> None:
        self.steps = list(steps)
        self.continue_on_error = continue_on_error

    def run(self, state: State | None = None) -> list[StepResult]:
        """Run every step against ``state`` and return the per-step results.

        Raises PipelineError, carrying the results so far, when a step fails
        and ``continue_on_error`` is off.
        """
        state = state if state is not None else State()
        results: list[StepResult] = []
        for step in self.steps:
            start = time.perf_counter()
            error: Exception | None = None
            try:
                step.fn(state)
            except Exception as exc:
                error = exc
            results.append(
                StepResult(step=step.name, duration=time.perf_counter() - start, error=error)
            )
            if error is not None and not self.continue_on_error:
                raise PipelineError(step.name, error, results) from error
        return results


def fetch_step(provider: Provider, keys: Sequence[str]) -> Step:
    """Return a step that loads ``keys`` from ``provider`` into the state."""
    wanted = list(keys)

    def fetch(state: State) -> None:
        for key in wanted:
            state.values[key] = provider.get_secret(key)

    return Step(name="fetch", fn=fetch)


def validate_step(rules: Sequence[Rule]) -> Step:
    """Return a step that checks every state value against each of ``rules``."""
    checks = list(rules)

    def check(state: State) -> None:
        for key, value in state.values.items():
            for rule in checks:
                result = validate(key, value, rule)
                if not result.passed:
                    raise ValidationError([result])

    return Step(name="validate", fn=check)


def write_step(provider: Provider) -> Step:
    """Return a step that writes every state value back to ``provider``."""

    def write(state: State) -> None:
        for key, value in state.values.items():
            provider.set_secret(key, value)

    return Step(name="write", fn=write)