"""Interface model and the per-type ownership rules."""

import re
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any

from pydantic import Field, field_validator

from netlayout.errors import ErrorAccumulator, LayoutError, LayoutInvariantError
from netlayout.models.base import LayoutModel
from netlayout.models.network import Network

if TYPE_CHECKING:
    from netlayout.layout import Layout

# 6 octets for ethernet, 8 for EUI-64, 20 for infiniband
_HWADDR_PATTERN = re.compile(
    r"^[0-9a-f]{2}(?:[:-][0-9a-f]{2}){5}$"
    r"|^[0-9a-f]{2}(?:[:-][0-9a-f]{2}){7}$"
    r"|^[0-9a-f]{2}(?:[:-][0-9a-f]{2}){19}$"
)


class InterfaceType(str, Enum):
    """Kind of interface.

    Each member gets its own arm in Interface.check(); adding a type means
    adding a member and its arm there.
    """

    PHYSICAL = "physical"
    """A NIC that exists before anything else is created."""

    BOND = "bond"
    """Link aggregation over physical interfaces. Exclusive owner."""

    BRIDGE = "bridge"
    """Layer 2 bridge over any non-bridge interfaces. Exclusive owner."""

    VLAN = "vlan"
    """802.1Q tagged interface. Shared owner."""

    @property
    def exclusive(self) -> bool:
        """Return True if members of this type may have no other owner."""
        return self in (InterfaceType.BOND, InterfaceType.BRIDGE)


class Interface(LayoutModel):
    """A node of the Layout graph.

    Names are the output-side identity and are unique across the Layout.
    MatchID is how the input format identified the interface; several
    physical interfaces may share one when an input matched more than one NIC.
    """

    type: InterfaceType = Field(description="Interface type")
    match_id: Annotated[
        str, Field("", alias="match-id", description="Identity from the input format")
    ]
    name: str = Field(description="Final interface name, unique in the Layout")
    current_hw_addr: Annotated[
        str, Field("", alias="hwaddr", description="MAC address, physical interfaces only")
    ]
    optional: Annotated[
        bool,
        Field(
            False,
            description="Not required for the network to come up; bubbles up to owners",
        ),
    ]
    interfaces: list[str] = Field(
        default_factory=list, description="Names of the interfaces this one builds on"
    )
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Type-specific settings, passed through untouched"
    )
    network: Annotated[Network | None, Field(None, description="Layer 3 configuration")]

    @field_validator("current_hw_addr")
    @classmethod
    def validate_hw_addr(cls, v: str) -> str:
        """Normalize a MAC address to lower-case colon-separated form.

        Raises:
            ValueError: If the address is not 6, 8 or 20 hex octets
        """
        if v == "":
            return v
        v = v.strip().lower()
        if not _HWADDR_PATTERN.match(v):
            raise ValueError(f"Invalid hardware address '{v}'")
        return v.replace("-", ":")

    @property
    def ref(self) -> str:
        """Type-qualified name used in error messages."""
        return f"{self.type.value}:{self.name}"

    @property
    def scope(self) -> str:
        """Error prefix: type and input-side identity, or name when there is none."""
        return f"{self.type.value}:{self.match_id or self.name}"

    def check_network(self) -> LayoutError | None:
        """Check the layer 3 configuration, if any, under this interface's scope."""
        if self.network is None:
            return None
        e = ErrorAccumulator(self.scope)
        e.merge(self.network.check())
        return e.or_none()

    def check(self, layout: "Layout") -> LayoutError | None:
        """Check this interface and record the ownership of its children.

        Appends to layout.roots and layout.child2parent as a side effect.
        Children are walked in sorted order so the result does not depend
        on how the input listed them.

        Args:
            layout: Layout this interface belongs to

        Returns:
            Every problem found, or None
        """
        e = ErrorAccumulator(self.scope)

        if self.type is InterfaceType.PHYSICAL:
            if not self.current_hw_addr:
                e.errorf("physical interface %s must have a hardware address", self.name)
            if self.interfaces:
                e.errorf(
                    "%s must not refer to sub interfaces %s", self.ref, ", ".join(self.interfaces)
                )
            layout.roots.append(self.name)
            return e.or_none()

        self.interfaces = sorted(set(self.interfaces))
        if not self.interfaces:
            layout.roots.append(self.name)
            return e.or_none()

        for name in self.interfaces:
            child = layout.interfaces.get(name)
            if child is None:
                e.errorf("%s refers to undefined sub interface %s", self.ref, name)
                continue
            if not self._can_build_on(child, e):
                continue
            if self.type.exclusive:
                self._claim_exclusive(layout, child, e)
            else:
                self._claim_shared(layout, child, e)
        return e.or_none()

    def _can_build_on(self, child: "Interface", e: ErrorAccumulator) -> bool:
        if self.type is InterfaceType.BOND:
            if child.type is not InterfaceType.PHYSICAL:
                e.errorf(
                    "%s refers to %s, which is not a physical interface", self.ref, child.ref
                )
                return False
        elif self.type is InterfaceType.BRIDGE:
            if child.type is InterfaceType.BRIDGE:
                e.errorf("%s cannot be built on %s", self.ref, child.ref)
                return False
        elif self.type is InterfaceType.VLAN:
            if child.type is InterfaceType.VLAN:
                e.errorf("%s cannot be built on %s", self.ref, child.ref)
                return False
        else:
            raise LayoutInvariantError(f"{self.ref} cannot own {child.ref}")
        return True

    def _claim_exclusive(
        self, layout: "Layout", child: "Interface", e: ErrorAccumulator
    ) -> None:
        owners = layout.child2parent.get(child.name)
        if owners:
            e.errorf(
                "%s is already owned by %s, it cannot be a member of %s",
                child.ref,
                ", ".join(layout.interfaces[owner].ref for owner in owners),
                self.ref,
            )
            return
        layout.child2parent[child.name] = [self.name]
        # An enslaved interface carries no layer 3 configuration of its own.
        child.network = None

    def _claim_shared(self, layout: "Layout", child: "Interface", e: ErrorAccumulator) -> None:
        owners = layout.child2parent.get(child.name)
        if not owners:
            layout.child2parent[child.name] = [self.name]
            return
        conflict = False
        for owner_name in owners:
            owner = layout.interfaces[owner_name]
            if owner.type is InterfaceType.VLAN:
                continue
            if not owner.type.exclusive:
                raise LayoutInvariantError(f"{owner.ref} recorded as owner of {child.ref}")
            e.errorf(
                "%s is already owned by %s, it cannot be a member of %s",
                child.ref,
                owner.ref,
                self.ref,
            )
            conflict = True
        if conflict:
            return
        layout.child2parent[child.name] = sorted([*owners, self.name])
