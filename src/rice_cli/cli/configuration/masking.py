"""Safe display of configuration values.

Every secret shown on screen goes through `mask`. Nothing else in the CLI
formats a token directly.
"""

from pydantic import SecretStr
from rich.markup import escape
from rich.table import Table

from rice_cli.cli.configuration.models import RiceConfig, ServiceConfig
from rice_cli.cli.configuration.options import (
    SECRET_FIELDS,
    SERVICE_FIELDS,
    SERVICE_NAMES,
    SERVICE_TITLES,
)

REDACTION_CHAR = "*"
MASK_LENGTH = 8
VISIBLE_SUFFIX = 4
NOT_SET = "Not set"

_FIELD_LABELS = {
    "url": "URL",
    "token": "Token",
    "user": "User",
    "http_port": "HTTP port",
    "run_id": "Run ID",
}


def mask(secret: str | SecretStr | None) -> str:
    """Return a display-safe form of a secret.

    Short secrets are fully redacted. Longer ones show only their last four
    characters. The output always has the same length, so it does not reveal
    how long the secret is.

    Args:
        secret: Secret value.

    Returns:
        The masked value, or "Not set" when there is no secret.
    """
    if isinstance(secret, SecretStr):
        secret = secret.get_secret_value()
    if not secret:
        return NOT_SET
    if len(secret) <= VISIBLE_SUFFIX:
        return REDACTION_CHAR * MASK_LENGTH
    return REDACTION_CHAR * (MASK_LENGTH - VISIBLE_SUFFIX) + secret[-VISIBLE_SUFFIX:]


def secret_hint(secret: str | SecretStr | None) -> str:
    """Return a prompt hint describing the current secret."""
    if isinstance(secret, SecretStr):
        secret = secret.get_secret_value()
    if not secret:
        return "not set"
    return f"current {mask(secret)}, leave blank to keep"


def display_value(service: ServiceConfig, field: str) -> str:
    """Return a field value formatted for display."""
    value = getattr(service, field)
    if field in SECRET_FIELDS:
        return mask(value)
    if value is None:
        return NOT_SET
    return str(value)


def render_report(config: RiceConfig) -> Table:
    """Build a table describing the configuration.

    Args:
        config: Configuration to describe.

    Returns:
        A Rich table with one section per service.
    """
    table = Table(title="Rice configuration", show_header=True, header_style="bold cyan")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Setting", style="white")
    table.add_column("Value", style="bright_white")

    for name in SERVICE_NAMES:
        service = config.service(name)
        title = SERVICE_TITLES[name]
        status = "[green]enabled[/green]" if service.enabled else "[dim]disabled[/dim]"
        table.add_row(title, "Status", status)
        if not service.enabled:
            continue
        for field in SERVICE_FIELDS[name]:
            table.add_row("", _FIELD_LABELS[field], escape(display_value(service, field)))
    return table
