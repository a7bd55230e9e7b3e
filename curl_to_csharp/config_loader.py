"""Config Loader - Loads request description files into CurlOptions.

A request file is a YAML (or JSON) mapping with one option model. String
values may reference environment variables as ${ENV_VAR}, which keeps
credentials such as user_password_pair out of the file. A reference to an
unset variable is an error. Write $${ for a literal ${, e.g. a payload that
is itself a template: payload: 'Hello $${name}' loads as 'Hello ${name}'.

Example:

    method: POST
    url: https://api.example.com/items
    headers:
      Accept: application/json
      Content-Type: application/json
    payload: '{"name": "widget"}'
    user_password_pair: ${API_USER}:${API_PASSWORD}
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from curl_to_csharp.models import CurlOptions


class ConfigError(Exception):
    """Raised when a request file cannot be loaded."""


# $${ is an escaped literal ${; ${NAME} is a reference
_REFERENCE_PATTERN = re.compile(r"\$\$\{|\$\{([^}]+)\}")


def load_request_options(request_path: Path) -> CurlOptions:
    """Load a request file, expand ${ENV_VAR} references and validate it."""
    if not request_path.exists():
        raise ConfigError(f"Request file not found: {request_path}")

    try:
        with open(request_path, "r", encoding="utf-8") as f:
            raw_request = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in request file: {e}") from e

    return parse_request_options(raw_request)


def parse_request_options(raw_request: Any) -> CurlOptions:
    """Validate an already-decoded request mapping."""
    if not isinstance(raw_request, dict):
        raise ConfigError("Request file must be a YAML mapping")

    raw_request = _expand_env(raw_request)

    try:
        return CurlOptions.model_validate(raw_request)
    except ValidationError as e:
        raise ConfigError(f"Invalid request structure: {e}") from e


def _expand_env(node: Any) -> Any:
    # Only values are expanded; mapping keys are field and header names
    if isinstance(node, str):
        return _REFERENCE_PATTERN.sub(_resolve_reference, node)
    if isinstance(node, dict):
        return {key: _expand_env(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand_env(value) for value in node]
    return node


def _resolve_reference(match: re.Match) -> str:
    name = match.group(1)
    if name is None:
        return "${"
    if name not in os.environ:
        raise ConfigError(f"Environment variable '{name}' is not set")
    return os.environ[name]
