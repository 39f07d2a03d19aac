"""Service configuration with port assignments and URLs."""
from __future__ import annotations
import sys
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from servicedash.utils.logger import ServiceLogger

DEFAULT_HOST = "localhost"
URL_SCHEME = "http"

SERVICE_PORTS = {
    "NGINX": 9080,
    "APACHE": 9081,
    "BUSYBOX": 9082,
    "MEMCACHED": 9083,
    "APP": 3000,
    "ALPINE": 9084,
    "REDIS": 9085,
    "POSTGRES": 9086,
    "MONGO": 9087,
    "MYSQL": 9088,
    "RABBITMQ": 9089,
    "ELASTICSEARCH": 9091,
    "GRAFANA": 3001,
    "PROMETHEUS": 9093,
    "JENKINS": 8001,
    "GITLAB": 9092,
    "DOCKER_REGISTRY": 5000,
    "PORTAINER": 8002,
    "VAULT": 8200,
    "CONSUL": 8500,
    "ETCD": 2379,
}

# Anchors found by a port literal in their stale href. Only these five
# services were ever bound this way; the rest rely on data-service.
LINK_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("9080", "nginx"),
    ("9081", "apache"),
    ("9082", "busybox"),
    ("9083", "memcached"),
    ("3000", "app"),
)

# stdout is reserved for CLI output
logger = ServiceLogger("servicedash", stream=sys.stderr)


def resolve_host(hostname: Optional[str] = None) -> str:
    """Return the hostname to build URLs with, falling back to localhost.

    IPv6 literals are bracketed so they can be followed by a port.
    """
    if not hostname:
        return DEFAULT_HOST
    if ":" in hostname and not hostname.startswith("["):
        return f"[{hostname}]"
    return hostname


@dataclass(frozen=True)
class ServiceDirectory:
    """Immutable map of service names to ports, bound to one host.

    Lookups are case-insensitive. URLs are built on every call, so a
    directory obtained with ``with_host`` reflects its host immediately.
    """

    host: str = DEFAULT_HOST
    ports: Mapping[str, int] = field(default_factory=lambda: dict(SERVICE_PORTS))

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", resolve_host(self.host))
        normalized = {name.upper(): int(port) for name, port in self.ports.items()}
        object.__setattr__(self, "ports", MappingProxyType(normalized))
        for name, port in self.ports.items():
            if not 1 <= port <= 65535:
                raise ValueError(f"Port {port} for service {name} is out of range")

    def with_host(self, host: Optional[str]) -> "ServiceDirectory":
        return replace(self, host=resolve_host(host))

    def lookup_port(self, service_name: str) -> Optional[int]:
        return self.ports.get(service_name.upper())

    def get_service_url(self, service_name: str) -> str:
        """Get the full URL for a service, or '' when it is not known."""
        port = self.lookup_port(service_name)
        if not port:
            logger.error(f"Service {service_name} not found", service=service_name)
            return ""
        return f"{URL_SCHEME}://{self.host}:{port}"

    def urls(self) -> Dict[str, str]:
        """All services with their URLs, keyed by lower-case name."""
        return {name.lower(): f"{URL_SCHEME}://{self.host}:{port}" for name, port in self.ports.items()}


DEFAULT_DIRECTORY = ServiceDirectory()


def get_service_url(service_name: str, host: Optional[str] = None) -> str:
    """Get the full URL for a service on ``host`` (default localhost)."""
    return DEFAULT_DIRECTORY.with_host(host).get_service_url(service_name)
