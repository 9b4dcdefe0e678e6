"""IP address value type."""

from collections.abc import Sequence
from ipaddress import (
    IPv4Address,
    IPv4Interface,
    IPv4Network,
    IPv6Address,
    IPv6Interface,
    IPv6Network,
    ip_interface,
)
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from netlayout.errors import ErrorAccumulator


class IP:
    """A single IP address or an address with a prefix length.

    The value remembers whether it was written in CIDR form, so "10.0.0.1"
    is a host address while "10.0.0.1/24" denotes a range even though both
    carry the same address. Instances are immutable and hashable.

    Usable directly as a pydantic field type: strings are parsed on model
    construction and the value serializes back to the string it was read
    from.
    """

    __slots__ = ("_interface", "_cidr")

    def __init__(self, value: str) -> None:
        text = value.strip()
        self._cidr = "/" in text
        self._interface: IPv4Interface | IPv6Interface = ip_interface(text)

    @property
    def address(self) -> IPv4Address | IPv6Address:
        return self._interface.ip

    @property
    def network(self) -> IPv4Network | IPv6Network:
        return self._interface.network

    def is_cidr(self) -> bool:
        """Return True if the value was given with a prefix length."""
        return self._cidr

    def is_ipv4(self) -> bool:
        return self._interface.version == 4

    def is_ipv6(self) -> bool:
        return self._interface.version == 6

    def __str__(self) -> str:
        if self._cidr:
            return str(self._interface)
        return str(self._interface.ip)

    def __repr__(self) -> str:
        return f"IP({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IP):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _coerce(cls, value: Any) -> "IP":
        if isinstance(value, cls):
            return value
        if isinstance(value, (IPv4Address, IPv6Address, IPv4Interface, IPv6Interface)):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"IP address must be a string, not {type(value).__name__}")
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(f"Invalid IP address: {value}") from e


def validate_ip_list(
    e: ErrorAccumulator, name: str, ips: Sequence[IP], ranges_ok: bool
) -> None:
    """Check every entry of an address list.

    Args:
        e: Accumulator receiving the errors
        name: Field name used in the error messages
        ips: Addresses to check
        ranges_ok: Whether CIDR ranges are permitted in this list
    """
    seen: set[IP] = set()
    for ip in ips:
        if not ranges_ok and ip.is_cidr():
            e.errorf("%s: %s must be a single IP address, not a range", name, ip)
        if ip in seen:
            e.errorf("%s: duplicate address %s", name, ip)
            continue
        seen.add(ip)
