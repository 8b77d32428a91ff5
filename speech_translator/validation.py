"""Generic, descriptor-driven validation of endpoints, parameters and headers."""

from __future__ import annotations

import re
from collections.abc import Mapping

from speech_translator.errors import ParameterValidationError
from speech_translator.operations import OperationDescriptor, ParameterDescriptor

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def verify_endpoint(endpoint: str | None) -> str:
    """Return the endpoint host (and optional path) without trailing slashes."""
    problems: list[str] = []
    value = (endpoint or "").strip()
    if not value:
        problems.append("endpoint is required")
    elif _SCHEME_RE.match(value):
        problems.append(f"endpoint must not include a scheme: {value!r}")
    elif any(ch.isspace() for ch in value):
        problems.append(f"endpoint must not contain whitespace: {value!r}")
    if problems:
        raise ParameterValidationError(problems)
    return value.rstrip("/")


def _check_value(descriptor: ParameterDescriptor, value: object, problems: list[str]) -> str | None:
    if not isinstance(value, str):
        problems.append(f"{descriptor.name} must be a string, got {type(value).__name__}")
        return None
    if not descriptor.options:
        return value

    items = [v.strip() for v in value.split(",")] if descriptor.multi_value else [value]
    bad = [v for v in items if v not in descriptor.options]
    if bad:
        problems.append(
            f"{descriptor.name} has invalid value(s) {', '.join(repr(b) for b in bad)}; "
            f"allowed: {', '.join(descriptor.options)}"
        )
        return None
    return ",".join(items)


def verify_parameters(
    operation: OperationDescriptor, parameters: Mapping[str, object] | None
) -> dict[str, str]:
    """Merge caller parameters over descriptor defaults and validate them.

    Returns an ordered mapping (descriptor order) of the parameters to send.
    Raises ParameterValidationError listing every problem found.
    """
    params = dict(parameters or {})
    problems: list[str] = []

    for name in params:
        if operation.parameter(name) is None:
            problems.append(f"unknown parameter {name!r}")

    resolved: dict[str, str] = {}
    for descriptor in operation.parameters:
        raw = params.get(descriptor.name)
        if raw is None or raw == "":
            raw = descriptor.value
        if raw is None or raw == "":
            if descriptor.required:
                problems.append(f"{descriptor.name} is required")
            continue
        checked = _check_value(descriptor, raw, problems)
        if checked is not None:
            resolved[descriptor.name] = checked

    if problems:
        raise ParameterValidationError(problems)
    return resolved


def verify_headers(
    operation: OperationDescriptor, headers: Mapping[str, object] | None
) -> dict[str, str]:
    """Merge caller headers over descriptor defaults and validate them."""
    problems: list[str] = []
    resolved = operation.header_defaults()

    for name, value in (headers or {}).items():
        descriptor = operation.header(name)
        if descriptor is None:
            problems.append(f"unknown header {name!r}")
            continue
        if not isinstance(value, str):
            problems.append(f"{descriptor.name} must be a string, got {type(value).__name__}")
            continue
        if "\r" in value or "\n" in value:
            problems.append(f"{descriptor.name} must not contain line breaks")
            continue
        if value:
            resolved[descriptor.name] = value
        else:
            resolved.pop(descriptor.name, None)

    if problems:
        raise ParameterValidationError(problems)
    return resolved
