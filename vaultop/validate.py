"""Validation of secret values against configurable rules."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Rule:
    """A constraint on a secret value; zero or empty fields are not checked."""

    min_length: int = 0
    max_length: int = 0
    pattern: str = ""


@dataclass
class ValidationResult:
    """Outcome of validating one secret."""

    key: str
    passed: bool
    errors: list[str] = field(default_factory=list)


class ValidationError(Exception):
    """Raised when one or more secrets fail validation."""

    def __init__(self, results: list[ValidationResult]) -> None:
        super().__init__("one or more secrets failed validation")
        self.results = results


def validate(key: str, value: str, rule: Rule) -> ValidationResult:
    """Check ``value`` against ``rule`` and return the result."""
    errors: list[str] = []
    if rule.min_length > 0 and len(value) < rule.min_length:
        errors.append(f"length {len(value)} is below minimum {rule.min_length}")
    if rule.max_length > 0 and len(value) > rule.max_length:
        errors.append(f"length {len(value)} exceeds maximum {rule.max_length}")
    if rule.pattern:
        try:
            compiled = re.compile(rule.pattern)
        except re.error as exc:
            errors.append(f'invalid pattern "{rule.pattern}": {exc}')
        else:
            if not compiled.search(value):
                errors.append(f'value does not match pattern "{rule.pattern}"')
    return ValidationResult(key=key, passed=not errors, errors=errors)


def validate_all(
    secrets: Mapping[str, str], rules: Mapping[str, Rule]
) -> list[ValidationResult]:
    """Validate each key that has a rule; a key with no value counts as empty.

    Returns all results, or raises ValidationError carrying them if any failed.
    """
    results = [validate(key, secrets.get(key, ""), rule) for key, rule in rules.items()]
    if any(not result.passed for result in results):
        raise ValidationError(results)
    return results