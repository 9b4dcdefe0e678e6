"""Layer 3 network configuration models."""

from typing import Annotated

from pydantic import Field

from netlayout.errors import ErrorAccumulator, LayoutError
from netlayout.models.base import LayoutModel
from netlayout.models.ip import IP, validate_ip_list
from netlayout.models.routing import Route, RoutePolicy

DHCP_IDENTIFIERS = ("", "mac")


class NSInfo(LayoutModel):
    """DNS name servers and search domains."""

    search: list[str] = Field(default_factory=list, description="Search domains, in order")
    addresses: list[IP] = Field(default_factory=list, description="Name server addresses")


class Network(LayoutModel):
    """Layer 3 configuration applied to an interface once it is up.

    Static addresses and DHCP may be combined, in which case both the
    static and the leased addresses end up on the interface.
    """

    dhcp4: Annotated[bool, Field(False, description="Solicit an IPv4 address via DHCP")]
    dhcp6: Annotated[bool, Field(False, description="Solicit an IPv6 address via DHCPv6")]
    dhcp_identifier: Annotated[
        str,
        Field(
            "",
            alias="dhcp-identifier",
            description="DHCP client identifier: '' for a generated client ID, 'mac' for the MAC",
        ),
    ]
    accept_ra: Annotated[
        bool,
        Field(False, alias="accept-ra", description="Autoconfigure IPv6 from router adverts"),
    ]
    addresses: Annotated[
        list[IP] | None, Field(None, description="Static addresses in CIDR notation")
    ]
    gateway4: Annotated[IP | None, Field(None, description="IPv4 default gateway")]
    gateway6: Annotated[IP | None, Field(None, description="IPv6 default gateway")]
    nameservers: NSInfo = Field(default_factory=NSInfo, description="DNS configuration")
    routes: list[Route] = Field(default_factory=list, description="Additional static routes")
    routing_policy: list[RoutePolicy] = Field(
        default_factory=list, alias="routing-policy", description="Policy routing rules"
    )

    def _dhcp(self) -> bool:
        return self.dhcp4 or self.dhcp6

    def configure(self) -> bool:
        """Return True if the interface gets any address at all."""
        return self._dhcp() or bool(self.addresses)

    def setup_static_only(self) -> bool:
        """Return True if only static addressing is used."""
        return not self._dhcp() and bool(self.addresses)

    def setup_dhcp_only(self) -> bool:
        """Return True if addressing comes from DHCP alone."""
        return self._dhcp() and not self.addresses

    def check(self) -> LayoutError | None:
        """Check the configuration, normalizing a missing address list to [].

        Returns:
            Every problem found, or None when the configuration is sound
        """
        e = ErrorAccumulator("network")
        if self.dhcp_identifier not in DHCP_IDENTIFIERS:
            e.errorf(
                "dhcp-identifier: %r is not one of %s",
                self.dhcp_identifier,
                ", ".join(repr(v) for v in DHCP_IDENTIFIERS),
            )
        if self.addresses is None:
            self.addresses = []
        validate_ip_list(e, "addresses", self.addresses, True)
        if self.gateway4 is not None and (not self.gateway4.is_ipv4() or self.gateway4.is_cidr()):
            e.errorf("gateway4 %s is not a single IPv4 address", self.gateway4)
        if self.gateway6 is not None and (not self.gateway6.is_ipv6() or self.gateway6.is_cidr()):
            e.errorf("gateway6 %s is not a single IPv6 address", self.gateway6)
        validate_ip_list(e, "nameservers", self.nameservers.addresses, False)
        for route in self.routes:
            e.merge(route.check())
        for policy in self.routing_policy:
            e.merge(policy.check())
        return e.or_none()
