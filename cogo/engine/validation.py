"""Reusable validators for step answers.

Each factory returns a callable that takes the raw value and raises
ValidationError when it is unacceptable.
"""

import re
from typing import Any, Callable, Iterable, Optional

from .errors import ValidationError
from .result import Result

Validator = Callable[[Any], None]

DROPLET_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9][a-zA-Z0-9._-]*$')
DROPLET_NAME_MAX_LENGTH = 63


def validate_required(field_name: str) -> Validator:
    """Reject None, blank strings and empty lists."""
    def validator(value: Any) -> None:
        if value is None:
            raise ValidationError(f"{field_name} is required")
        if isinstance(value, str) and not value.strip():
            raise ValidationError(f"{field_name} cannot be empty")
        if isinstance(value, (list, tuple)) and len(value) == 0:
            raise ValidationError(f"{field_name} cannot be empty")
    return validator


def validate_length(field_name: str, min_length: int, max_length: int) -> Validator:
    """Check string length; a negative bound is not checked."""
    def validator(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")
        if min_length >= 0 and len(value) < min_length:
            raise ValidationError(f"{field_name} must be at least {min_length} characters")
        if max_length >= 0 and len(value) > max_length:
            raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return validator


def validate_droplet_name(value: Any) -> None:
    """Validate a droplet name.

    Rules:
    - 1 to 63 characters
    - starts with a letter or number
    - only letters, numbers, hyphens, underscores and periods

    Raises:
        ValidationError: If the name breaks any rule
    """
    if not isinstance(value, str):
        raise ValidationError("droplet name must be a string")
    if not value:
        raise ValidationError("droplet name cannot be empty")
    if len(value) > DROPLET_NAME_MAX_LENGTH:
        raise ValidationError(f"droplet name must be {DROPLET_NAME_MAX_LENGTH} characters or less")
    if not DROPLET_NAME_PATTERN.match(value):
        raise ValidationError(
            "droplet name must start with a letter or number and contain only letters, "
            "numbers, hyphens, underscores, and periods"
        )


def validate_regex(field_name: str, pattern: str, description: str) -> Validator:
    compiled = re.compile(pattern)

    def validator(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")
        if not compiled.match(value):
            raise ValidationError(f"{field_name} must match pattern: {description}")
    return validator


def validate_range(field_name: str, minimum: int, maximum: int) -> Validator:
    """Check a number lies in [minimum, maximum]; floats are truncated first."""
    def validator(value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{field_name} must be a number")
        number = int(value)
        if number < minimum or number > maximum:
            raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return validator


def validate_one_of(field_name: str, allowed: Iterable[str]) -> Validator:
    """Case-sensitive membership check."""
    allowed = list(allowed)

    def validator(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")
        if value not in allowed:
            raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return validator


def combine(*validators: Validator) -> Validator:
    """Run validators in order; the first failure wins."""
    def validator(value: Any) -> None:
        for check in validators:
            check(value)
    return validator


def validate_result(result: Result, validator: Optional[Validator]) -> None:
    if validator is None:
        return
    validator(result.value)


def validate_input(
    field_name: str,
    required: bool,
    min_length: int = -1,
    max_length: int = -1,
    pattern: str = "",
    pattern_description: str = "",
) -> Validator:
    """Build the usual text-field validator from simple options."""
    validators = []
    if required:
        validators.append(validate_required(field_name))
    if min_length >= 0 or max_length >= 0:
        validators.append(validate_length(field_name, min_length, max_length))
    if pattern:
        validators.append(validate_regex(field_name, pattern, pattern_description))
    return combine(*validators)
