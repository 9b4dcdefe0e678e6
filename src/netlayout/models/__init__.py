"""Pydantic models for the entities of a Layout."""

from netlayout.models.interface import Interface, InterfaceType
from netlayout.models.ip import IP, validate_ip_list
from netlayout.models.network import Network, NSInfo
from netlayout.models.routing import Route, RoutePolicy

__all__ = [
    # interface
    "Interface",
    "InterfaceType",
    # ip
    "IP",
    "validate_ip_list",
    # network
    "Network",
    "NSInfo",
    # routing
    "Route",
    "RoutePolicy",
]
