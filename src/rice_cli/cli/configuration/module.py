"""Generation and parsing of the rice.config.js module.

The module is owned by the CLI and rewritten in full on every setup run. Values
are read from the environment at runtime; non-secret values also carry a
literal fallback so the file is usable on its own, while tokens only ever
reference the environment.

Example output::

    module.exports = {
      storage: {
        enabled: true,
        url: process.env.RICE_STORAGE_URL || "localhost:50051",
        token: process.env.RICE_STORAGE_TOKEN,
      },
      state: {
        enabled: false,
      },
    };
"""

import json
import re
from pathlib import Path
from typing import Any

from rice_cli.cli.configuration.errors import ParseError
from rice_cli.cli.configuration.models import RiceConfig
from rice_cli.cli.configuration.options import (
    SDK_PACKAGE,
    SECRET_FIELDS,
    SERVICE_FIELDS,
    SERVICE_NAMES,
    env_key,
    module_key,
)

MODULE_HEADER = (
    f"/** @type {{import('{SDK_PACKAGE}').RiceConfig}} */\n"
    "// Generated by `rice setup`. Changes to this file are overwritten.\n"
)

_EXPORTS_RE = re.compile(r"module\.exports\s*=\s*\{")
_SECTION_RE = re.compile(r"\b(?P<name>\w+)\s*:\s*\{(?P<body>[^{}]*)\}", re.DOTALL)
_FIELD_RE = re.compile(r"^(?P<key>\w+)\s*:\s*(?P<expr>.*?)\s*,?$")
_ENV_REF_RE = re.compile(r'^process\.env\.(?P<key>\w+)(?:\s*\|\|\s*(?P<fallback>".*"))?$')


def render_module(config: RiceConfig) -> str:
    """Render the configuration module for a config.

    Args:
        config: Configuration to render.

    Returns:
        The module source.
    """
    lines = [MODULE_HEADER + "module.exports = {"]
    for service in SERVICE_NAMES:
        settings = config.service(service)
        lines.append(f"  {service}: {{")
        lines.append(f"    enabled: {'true' if settings.enabled else 'false'},")
        if settings.enabled:
            for field in SERVICE_FIELDS[service]:
                value = getattr(settings, field)
                if value is None:
                    continue
                reference = f"process.env.{env_key(service, field)}"
                if field not in SECRET_FIELDS:
                    reference = f"{reference} || {json.dumps(str(value))}"
                lines.append(f"    {module_key(field)}: {reference},")
        lines.append("  },")
    lines.append("};")
    return "\n".join(lines) + "\n"


def parse_module_text(text: str, path: Path) -> dict[str, dict[str, Any]]:
    """Parse a generated configuration module.

    Args:
        text: Module source.
        path: Path of the module, used in error messages.

    Returns:
        Field values per service. Only `enabled` and literal fallbacks are
        returned; values that exist only in the environment are omitted.

    Raises:
        ParseError: If the source does not have the generated shape.
    """
    exports = _EXPORTS_RE.search(text)
    if exports is None:
        raise ParseError(path, "missing `module.exports = {` declaration")

    sections = {
        match.group("name"): match.group("body")
        for match in _SECTION_RE.finditer(text, exports.end())
    }
    parsed: dict[str, dict[str, Any]] = {}
    for service in SERVICE_NAMES:
        if service not in sections:
            raise ParseError(path, f"missing `{service}` section")
        parsed[service] = _parse_section(service, sections[service], path)
    return parsed


def _parse_section(service: str, body: str, path: Path) -> dict[str, Any]:
    """Parse the fields of one service section."""
    fields_by_key = {module_key(field): field for field in SERVICE_FIELDS[service]}
    values: dict[str, Any] = {}
    for raw_line in body.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("//"):
            continue
        match = _FIELD_RE.match(line)
        if match is None:
            raise ParseError(path, f"cannot parse `{line}` in `{service}` section")
        key = match.group("key")
        value = _parse_expression(match.group("expr"), service, path)
        if key == "enabled":
            if not isinstance(value, bool):
                raise ParseError(path, f"`{service}.enabled` must be true or false")
            values["enabled"] = value
        elif key in fields_by_key and value is not None:
            values[fields_by_key[key]] = value
    return values


def _parse_expression(expr: str, service: str, path: Path) -> Any:
    """Return the literal value of a field expression, if it has one."""
    if expr in ("true", "false"):
        return expr == "true"
    reference = _ENV_REF_RE.match(expr)
    if reference is not None:
        fallback = reference.group("fallback")
        return _parse_string(fallback, service, path) if fallback else None
    if expr.startswith('"'):
        return _parse_string(expr, service, path)
    raise ParseError(path, f"unsupported value `{expr}` in `{service}` section")


def _parse_string(literal: str, service: str, path: Path) -> str:
    """Decode a JSON string literal."""
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as exc:
        raise ParseError(path, f"invalid string in `{service}` section: {exc}") from exc
    if not isinstance(value, str):
        raise ParseError(path, f"expected a string in `{service}` section")
    return value

