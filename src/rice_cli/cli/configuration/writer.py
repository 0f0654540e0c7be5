"""Persistence of the configuration to the env file and config module."""

import logging
import shutil
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from rice_cli.cli.configuration.env import merge_env_lines, read_env_file, render_env_lines
from rice_cli.cli.configuration.errors import PersistenceError
from rice_cli.cli.configuration.models import RiceConfig
from rice_cli.cli.configuration.module import render_module
from rice_cli.cli.configuration.options import (
    SECRET_FIELDS,
    SERVICE_FIELDS,
    SERVICE_NAMES,
    env_key,
)
from rice_cli.core.settings import CliSettings, env_path, module_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteReport:
    """Files written by a persistence run."""

    env_path: Path
    env_created: bool
    module_path: Path
    module_created: bool


def env_updates(config: RiceConfig) -> dict[str, str | None]:
    """Return the value for every owned env key.

    Args:
        config: Configuration to persist.

    Returns:
        Env values keyed by env key. Unset fields map to None.
    """
    updates: dict[str, str | None] = {}
    for service in SERVICE_NAMES:
        settings = config.service(service)
        for field in SERVICE_FIELDS[service]:
            if field in SECRET_FIELDS:
                value = settings.token_value()
            else:
                raw = getattr(settings, field)
                value = None if raw is None else str(raw)
            updates[env_key(service, field)] = value
    return updates


def write_configuration(config: RiceConfig, root: Path, settings: CliSettings) -> WriteReport:
    """Write the env file and the configuration module.

    The env file is merged so unrelated lines survive; the module is
    regenerated. Each file is replaced atomically, and a failure stops the
    run before the next file is touched.

    Args:
        config: Configuration to persist.
        root: Project working directory.
        settings: CLI settings.

    Returns:
        The paths that were written.

    Raises:
        PersistenceError: If a file cannot be merged or written.
    """
    env_file = env_path(root, settings)
    module_file = module_path(root, settings)
    env_created = not env_file.exists()
    module_created = not module_file.exists()

    write_env_config(env_file, config)
    write_text_atomic(module_file, render_module(config))
    logger.debug("Wrote %s and %s", env_file, module_file)

    return WriteReport(
        env_path=env_file,
        env_created=env_created,
        module_path=module_file,
        module_created=module_created,
    )


def write_env_config(path: Path, config: RiceConfig) -> None:
    """Merge the configuration into an env file.

    Args:
        path: Path to the env file.
        config: Configuration to persist.

    Raises:
        PersistenceError: If the existing file cannot be read safely or the
            new content cannot be written.
    """
    try:
        lines = read_env_file(path, strict=False)
    except UnicodeDecodeError as exc:
        raise PersistenceError(path, "existing file is not valid UTF-8") from exc
    except OSError as exc:
        raise PersistenceError(path, exc.strerror or str(exc)) from exc

    merged = merge_env_lines(lines, env_updates(config))
    write_text_atomic(path, render_env_lines(merged))


def write_text_atomic(path: Path, content: str) -> None:
    """Write a file atomically using temp file + rename.

    An existing file keeps its permission bits.

    Args:
        path: Destination path.
        content: File content.

    Raises:
        PersistenceError: If the write or rename fails.
    """
    temp_path = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with temp_path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        if path.exists():
            shutil.copymode(path, temp_path)
        temp_path.replace(path)
    except OSError as exc:
        with suppress(OSError):
            temp_path.unlink(missing_ok=True)
        raise PersistenceError(path, exc.strerror or str(exc)) from exc

