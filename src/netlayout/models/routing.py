"""Static route and routing policy models."""

from typing import Annotated, Literal

from pydantic import Field

from netlayout.errors import ErrorAccumulator, LayoutError
from netlayout.models.base import LayoutModel
from netlayout.models.ip import IP

RouteType = Literal["unicast", "unreachable", "blackhole", "prohibit"]
RouteScope = Literal["global", "link", "host"]


class Route(LayoutModel):
    """A static route to install when the owning interface comes up."""

    from_: Annotated[
        IP | None, Field(None, alias="from", description="Source address or range")
    ]
    to: Annotated[IP | None, Field(None, description="Destination address or range")]
    via: Annotated[IP | None, Field(None, description="Next-hop address")]
    on_link: Annotated[
        bool,
        Field(
            False,
            alias="on-link",
            description="Skip the kernel reachability check for the next hop",
        ),
    ]
    metric: Annotated[
        int, Field(0, ge=0, description="Route metric (0 leaves the backend default of 100)")
    ]
    type: Annotated[RouteType, Field("unicast", description="Route type")]
    scope: Annotated[RouteScope, Field("global", description="Route scope")]
    table: Annotated[
        int, Field(0, ge=0, description="Routing table (0 uses the table implied by type)")
    ]

    def check(self) -> LayoutError | None:
        """Check next-hop shape and the fields required by the route type."""
        e = ErrorAccumulator("route")
        if self.via is not None and self.via.is_cidr():
            e.errorf("via must be a single IP address, not %s", self.via)
        if self.type == "unicast":
            if self.to is None or self.via is None:
                e.errorf("unicast routes require 'to' and 'via'")
        elif self.to is None:
            e.errorf("%s routes require 'to'", self.type)
        return e.or_none()


class RoutePolicy(LayoutModel):
    """A policy routing rule.

    Exactly one of from_ and to selects the packets the rule applies to.
    """

    from_: Annotated[
        IP | None, Field(None, alias="from", description="Source address or range to match")
    ]
    to: Annotated[IP | None, Field(None, description="Destination address or range to match")]
    table: Annotated[int, Field(0, ge=0, description="Routing table to use on match")]
    priority: Annotated[int, Field(0, ge=0, description="Rule priority, lower wins")]
    fwmark: Annotated[int, Field(0, ge=0, alias="mark", description="Firewall mark to match")]
    tos: Annotated[
        int, Field(0, ge=0, le=255, alias="type-of-service", description="TOS value to match")
    ]

    def check(self) -> LayoutError | None:
        e = ErrorAccumulator("routing-policy")
        if (self.from_ is None) == (self.to is None):
            e.errorf("routing policy must include exactly one of 'from' or 'to'")
        return e.or_none()
