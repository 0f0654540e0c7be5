"""Reachability checks for the configured Rice services."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from rice_cli.cli.configuration.models import RiceConfig, ServiceConfig, StorageConfig
from rice_cli.cli.configuration.options import SERVICE_NAMES
from rice_cli.core.settings import CliSettings

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Outcome of a single health probe."""

    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    REJECTED = "rejected"
    SKIPPED = "skipped"

    @property
    def is_failure(self) -> bool:
        """Return true for outcomes that indicate a problem."""
        return self in (HealthStatus.UNREACHABLE, HealthStatus.REJECTED)


@dataclass(frozen=True)
class HealthCheckResult:
    """Result of checking one service."""

    service: str
    status: HealthStatus
    url: str | None = None
    detail: str = ""
    status_code: int | None = None


def build_health_url(service: ServiceConfig, health_path: str) -> str:
    """Return the health endpoint URL for a service.

    URLs without a scheme are treated as plain HTTP hosts. When a storage HTTP
    port is configured it replaces the port of the configured URL, which
    usually points at the gRPC listener.

    Args:
        service: Service settings with a URL.
        health_path: Path of the health endpoint.

    Returns:
        The health URL.

    Raises:
        httpx.InvalidURL: If the configured URL cannot be parsed.
    """
    base = str(service.url)
    if "://" not in base:
        base = f"http://{base}"
    url = httpx.URL(base)
    if isinstance(service, StorageConfig) and service.http_port:
        url = url.copy_with(port=service.http_port)
    path = url.path.rstrip("/") + "/" + health_path.lstrip("/")
    return str(url.copy_with(path=path))


async def probe_service(
    name: str,
    service: ServiceConfig,
    client: httpx.AsyncClient,
    settings: CliSettings,
) -> HealthCheckResult:
    """Probe one service once.

    Args:
        name: Service name.
        service: Service settings.
        client: HTTP client used for the request.
        settings: CLI settings.

    Returns:
        The classified outcome.
    """
    if not service.enabled or not service.url:
        return HealthCheckResult(service=name, status=HealthStatus.SKIPPED)

    try:
        url = build_health_url(service, settings.health_path)
    except httpx.InvalidURL as exc:
        return HealthCheckResult(
            service=name,
            status=HealthStatus.UNREACHABLE,
            detail=f"Invalid URL: {exc}",
        )

    headers = {}
    token = service.token_value()
    if token:
        # httpx sends header values as ASCII.
        if not token.isascii():
            return HealthCheckResult(
                service=name,
                status=HealthStatus.UNREACHABLE,
                url=url,
                detail="Token contains non-ASCII characters and cannot be sent",
            )
        headers["Authorization"] = f"Bearer {token}"

    logger.debug("Probing %s at %s", name, url)
    try:
        response = await client.get(url, headers=headers)
    except httpx.TimeoutException:
        return HealthCheckResult(
            service=name,
            status=HealthStatus.UNREACHABLE,
            url=url,
            detail=f"Timed out after {settings.health_timeout:g}s",
        )
    except httpx.TransportError as exc:
        return HealthCheckResult(
            service=name,
            status=HealthStatus.UNREACHABLE,
            url=url,
            detail=_describe_transport_error(exc),
        )

    if response.is_success:
        status = HealthStatus.REACHABLE
    else:
        status = HealthStatus.REJECTED
    return HealthCheckResult(
        service=name,
        status=status,
        url=url,
        detail=f"Status {response.status_code} {response.reason_phrase}".strip(),
        status_code=response.status_code,
    )


async def check_services(
    config: RiceConfig,
    settings: CliSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[HealthCheckResult]:
    """Probe every service concurrently.

    Args:
        config: Configuration to check.
        settings: CLI settings.
        transport: Optional transport, used to stub the network in tests.

    Returns:
        One result per service, in service order.
    """
    async with httpx.AsyncClient(
        timeout=settings.health_timeout,
        follow_redirects=False,
        transport=transport,
    ) as client:
        return list(
            await asyncio.gather(
                *(
                    probe_service(name, config.service(name), client, settings)
                    for name in SERVICE_NAMES
                )
            )
        )


def run_health_checks(
    config: RiceConfig,
    settings: CliSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[HealthCheckResult]:
    """Probe every service from synchronous code.

    Args:
        config: Configuration to check.
        settings: CLI settings.
        transport: Optional transport, used to stub the network in tests.

    Returns:
        One result per service, in service order.
    """
    return asyncio.run(check_services(config, settings, transport))


def _describe_transport_error(exc: httpx.TransportError) -> str:
    """Return a short description of a network failure."""
    if isinstance(exc, httpx.ConnectError):
        return f"Connection failed: {exc}" if str(exc) else "Connection failed"
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
