"""Names, labels and defaults shared by the configuration modules."""

SERVICE_STORAGE = "storage"
SERVICE_STATE = "state"
SERVICE_NAMES = (SERVICE_STORAGE, SERVICE_STATE)

SERVICE_TITLES = {
    SERVICE_STORAGE: "Storage",
    SERVICE_STATE: "State",
}

ENV_KEY_PREFIX = "RICE"
ENV_SECTION_HEADER = "# Rice Configuration"

# Persisted fields per service, in file order. The env key is derived from the
# field name and the module key is the camelCase field name.
SERVICE_FIELDS = {
    SERVICE_STORAGE: ("url", "token", "user", "http_port"),
    SERVICE_STATE: ("url", "token", "run_id"),
}

SECRET_FIELDS = frozenset({"token"})

DEFAULT_SERVICE_URL = "localhost:50051"
DEFAULT_STORAGE_USER = "admin"
DEFAULT_STORAGE_HTTP_PORT = "3000"
DEFAULT_STATE_RUN_ID = "default"

SDK_PACKAGE = "rice-node-sdk"


def env_key(service: str, field: str) -> str:
    """Return the env file key for a service field.

    Args:
        service: Service name.
        field: Field name on the service model.

    Returns:
        The env key, e.g. RICE_STORAGE_URL.
    """
    return f"{ENV_KEY_PREFIX}_{service.upper()}_{field.upper()}"


def module_key(field: str) -> str:
    """Return the configuration module key for a service field."""
    head, *rest = field.split("_")
    return head + "".join(part.capitalize() for part in rest)
