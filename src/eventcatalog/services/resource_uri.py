"""Resource reference URIs.

A resource reference names a resource on a server of a given protocol::

    [async+]<protocol>://<server>@<mode>/<type>/<name>

for example ``async+kafka://kafka_server@write/topic/orders``.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple

from eventcatalog.errors.exceptions import MalformedURIError
from eventcatalog.models.enums import Protocol, ResourceMode, ResourceType

ASYNC_PREFIX = "async+"

PROTOCOLS = frozenset(p.value for p in Protocol)
MODES = frozenset(m.value for m in ResourceMode)
RESOURCE_TYPES = frozenset(t.value for t in ResourceType)

_URI_RE = re.compile(
    r"^(?P<protocol>[^:/@\s]+)://(?P<server>[^/@:\s]+)@(?P<mode>[^/\s]+)/(?P<type>[^/\s]+)/(?P<name>[^/\s]+)$"
)


class ResourceKey(NamedTuple):
    """A resource addressed by the name of its server and its own name."""

    server: str
    resource: str


@dataclass(frozen=True)
class ResourceReference:
    protocol: Protocol
    server: str
    mode: ResourceMode
    resource_type: ResourceType
    name: str

    def __str__(self) -> str:
        return format_resource_reference(
            self.protocol, self.server, self.mode, self.resource_type, self.name
        )

    @property
    def key(self) -> ResourceKey:
        return ResourceKey(self.server, self.name)


def parse_resource_reference(uri: str) -> ResourceReference:
    """Parse a resource reference, with or without the ``async+`` prefix.

    Raises:
        MalformedURIError: when a segment is missing or carries an unknown value.
    """
    body = uri[len(ASYNC_PREFIX):] if uri.startswith(ASYNC_PREFIX) else uri
    match = _URI_RE.match(body)
    if match is None:
        raise MalformedURIError(
            uri, "expected [async+]<protocol>://<server>@<mode>/<type>/<name>"
        )

    protocol, mode, resource_type = match["protocol"], match["mode"], match["type"]
    if protocol not in PROTOCOLS:
        raise MalformedURIError(uri, f"unknown protocol '{protocol}'")
    if mode not in MODES:
        raise MalformedURIError(uri, f"unknown mode '{mode}'")
    if resource_type not in RESOURCE_TYPES:
        raise MalformedURIError(uri, f"unknown resource type '{resource_type}'")

    return ResourceReference(
        protocol=Protocol(protocol),
        server=match["server"],
        mode=ResourceMode(mode),
        resource_type=ResourceType(resource_type),
        name=match["name"],
    )


def format_resource_reference(
    protocol: str, server: str, mode: str, resource_type: str, name: str
) -> str:
    return f"{ASYNC_PREFIX}{protocol}://{server}@{mode}/{resource_type}/{name}"
