"""Reconstruction of the current configuration from files on disk."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeVar, Union

from pydantic import ValidationError

from rice_cli.cli.configuration.env import env_values, read_env_file
from rice_cli.cli.configuration.errors import ParseError
from rice_cli.cli.configuration.models import RiceConfig, StateConfig, StorageConfig
from rice_cli.cli.configuration.module import parse_module_text
from rice_cli.cli.configuration.options import (
    SERVICE_FIELDS,
    SERVICE_NAMES,
    SERVICE_STATE,
    SERVICE_STORAGE,
    env_key,
)
from rice_cli.core.settings import CliSettings, env_path, module_path

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SERVICE_MODELS = {
    SERVICE_STORAGE: StorageConfig,
    SERVICE_STATE: StateConfig,
}


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """A file that was read and parsed."""

    path: Path
    value: T


@dataclass(frozen=True)
class Absent:
    """A file that does not exist."""

    path: Path


@dataclass(frozen=True)
class Malformed:
    """A file that exists but could not be read or parsed."""

    path: Path
    reason: str


ReadResult = Union[Loaded[T], Absent, Malformed]


@dataclass
class ExistingState:
    """Configuration found on disk, plus how each source was read."""

    config: RiceConfig
    env: ReadResult[dict[str, str]]
    module: ReadResult[dict[str, dict[str, Any]]]
    warnings: list[str] = field(default_factory=list)

    @property
    def module_exists(self) -> bool:
        """Return true when the configuration module file exists."""
        return not isinstance(self.module, Absent)


def read_env_source(path: Path) -> ReadResult[dict[str, str]]:
    """Read the env file.

    Args:
        path: Path to the env file.

    Returns:
        The key/value pairs, or why they are unavailable.
    """
    if not path.exists():
        return Absent(path)
    try:
        lines = read_env_file(path)
    except ParseError as exc:
        return Malformed(path, exc.reason)
    except UnicodeDecodeError:
        return Malformed(path, "file is not valid UTF-8")
    except OSError as exc:
        return Malformed(path, exc.strerror or str(exc))
    return Loaded(path, env_values(lines))


def read_module_source(path: Path) -> ReadResult[dict[str, dict[str, Any]]]:
    """Read the generated configuration module.

    Args:
        path: Path to the configuration module.

    Returns:
        The per-service values, or why they are unavailable.
    """
    if not path.exists():
        return Absent(path)
    try:
        text = path.read_text(encoding="utf-8")
        return Loaded(path, parse_module_text(text, path))
    except ParseError as exc:
        return Malformed(path, exc.reason)
    except UnicodeDecodeError:
        return Malformed(path, "file is not valid UTF-8")
    except OSError as exc:
        return Malformed(path, exc.strerror or str(exc))


def load_existing_state(root: Path, settings: CliSettings) -> ExistingState:
    """Load the configuration currently stored in a project.

    Missing or broken files are not errors: they contribute nothing and, when
    broken, add a warning.

    Args:
        root: Project working directory.
        settings: CLI settings.

    Returns:
        The reconstructed configuration and read results.
    """
    env = read_env_source(env_path(root, settings))
    module = read_module_source(module_path(root, settings))
    warnings = [
        f"Ignoring {source.path.name}: {source.reason}"
        for source in (env, module)
        if isinstance(source, Malformed)
    ]

    services: dict[str, Any] = {}
    for service in SERVICE_NAMES:
        values = _merge_service_values(service, env, module)
        services[service] = _build_service(service, values, warnings)

    for message in warnings:
        logger.warning(message)
    return ExistingState(
        config=RiceConfig(**services),
        env=env,
        module=module,
        warnings=warnings,
    )


def _merge_service_values(
    service: str,
    env: ReadResult[dict[str, str]],
    module: ReadResult[dict[str, dict[str, Any]]],
) -> dict[str, Any]:
    """Combine module and env values for a service; env values win."""
    values: dict[str, Any] = {"enabled": False}
    if isinstance(module, Loaded):
        values.update(module.value.get(service, {}))
    if isinstance(env, Loaded):
        for name in SERVICE_FIELDS[service]:
            value = env.value.get(env_key(service, name))
            if value:
                values[name] = value
        values["enabled"] = bool(env.value.get(env_key(service, "url")))
    return values


def _build_service(service: str, values: dict[str, Any], warnings: list[str]) -> Any:
    """Validate service values, falling back to a disabled service."""
    model = _SERVICE_MODELS[service]
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or service}: {error['msg']}"
            for error in exc.errors()
        )
        warnings.append(f"Ignoring existing {service} settings: {details}")
        return model()
