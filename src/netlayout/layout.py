"""The Layout: the whole interface graph and its derived indices.

A Layout sits between input formats and output formats. A reader fills in
``interfaces`` and calls :meth:`Layout.check`; only when that returns None
may a writer rely on ``roots`` and ``child2parent`` to order interface
creation.
"""

import logging

from pydantic import Field

from netlayout.errors import ErrorAccumulator, LayoutError
from netlayout.models.base import LayoutModel
from netlayout.models.interface import Interface

logger = logging.getLogger(__name__)


class Layout(LayoutModel):
    """Desired network interface topology of one machine.

    ``interfaces`` must be closed: every name listed in an interface's own
    ``interfaces`` resolves to a key of this mapping.

    ``child2parent`` and ``roots`` are derived. They are rebuilt from
    scratch on every check() and any values supplied on input are discarded.
    """

    interfaces: dict[str, Interface] = Field(
        default_factory=dict, description="All interfaces, keyed by name"
    )
    child2parent: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Interface name to the sorted names of the interfaces owning it",
    )
    roots: list[str] = Field(
        default_factory=list,
        description=(
            "Interfaces with no creation dependency, brought up first: every physical "
            "interface and every interface building on nothing. Interfaces that nothing "
            "owns are not roots unless they also qualify; see top_level()"
        ),
    )

    def check(self) -> LayoutError | None:
        """Validate the Layout and rebuild ``roots`` and ``child2parent``.

        Interfaces are checked in name order. Cycle detection only runs
        when every interface passed, since ownership recorded for a broken
        graph is not meaningful.

        Returns:
            A LayoutError listing every violation, or None if the Layout
            describes a sane network configuration
        """
        e = ErrorAccumulator("layout")
        self.roots = []
        self.child2parent = {}

        members = sorted(self.interfaces)
        for key in members:
            interface = self.interfaces[key]
            if interface.name != key:
                e.errorf("interface %s is stored under the name %s", interface.ref, key)
                continue
            e.merge(interface.check(self))
        # After ownership, so networks dropped from enslaved interfaces are skipped.
        for key in members:
            e.merge(self.interfaces[key].check_network())

        if e.empty():
            clean: set[str] = set()
            for key in members:
                self._cyclic(key, [], clean, e)

        self.roots.sort()
        result = e.or_none()
        if result is None:
            logger.info(
                "Layout is valid: %d interfaces, %d roots", len(self.interfaces), len(self.roots)
            )
        else:
            logger.error("Layout is invalid: %d error(s)", len(result.messages))
        return result

    def check_or_raise(self) -> None:
        """Like check(), but raise the LayoutError instead of returning it.

        Raises:
            LayoutError: If the Layout is invalid
        """
        error = self.check()
        if error is not None:
            raise error

    def _cyclic(
        self, name: str, working: list[str], clean: set[str], e: ErrorAccumulator
    ) -> None:
        """Walk from name towards its owners looking for a cycle.

        Args:
            name: Interface to visit
            working: Names on the path from the start of this walk to name
            clean: Names whose owners have all been walked already
            e: Accumulator receiving cycle errors
        """
        if name in clean:
            return
        if name in working:
            cycle = working[working.index(name) :]
            e.errorf("%s: cycle detected: %s", name, " -> ".join([*cycle, name]))
            return
        path = [*working, name]
        for owner in self.child2parent.get(name, []):
            self._cyclic(owner, path, clean, e)
        # Only mark a node once every owner above it has been walked.
        clean.add(name)

    def parents_of(self, name: str) -> list[str]:
        """Return the names of the interfaces owning name, sorted."""
        return list(self.child2parent.get(name, []))

    def top_level(self) -> list[str]:
        """Return the sorted names of interfaces nothing else owns."""
        return sorted(name for name in self.interfaces if name not in self.child2parent)
