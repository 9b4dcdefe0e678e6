"""Pytest configuration and fixtures for netlayout tests."""

from collections.abc import Callable
from typing import Any

import pytest

from netlayout.layout import Layout
from netlayout.models import Interface, InterfaceType

InterfaceFactory = Callable[..., Interface]
LayoutFactory = Callable[..., Layout]


@pytest.fixture
def make_interface() -> InterfaceFactory:
    """Fixture providing a factory for Interfaces.

    Physical interfaces get a hardware address unless one is given.

    Usage:
        def test_something(make_interface):
            bond = make_interface("bond", "bond0", "eth0", "eth1")

    Returns:
        Callable taking type, name and child names, plus any other
        Interface fields as keyword arguments
    """
    counter = iter(range(1, 256))

    def factory(type_: str, name: str, *children: str, **fields: Any) -> Interface:
        if type_ == InterfaceType.PHYSICAL.value:
            fields.setdefault("current_hw_addr", f"52:54:00:00:00:{next(counter):02x}")
        return Interface(type=type_, name=name, interfaces=list(children), **fields)

    return factory


@pytest.fixture
def make_layout() -> LayoutFactory:
    """Fixture providing a factory building a Layout from Interfaces.

    Returns:
        Callable taking Interfaces and returning an unchecked Layout
    """

    def factory(*interfaces: Interface) -> Layout:
        return Layout(interfaces={interface.name: interface for interface in interfaces})

    return factory


@pytest.fixture
def sample_yaml() -> str:
    """A layout with a bonded bridge and two vlans on top of it."""
    return """\
interfaces:
  eth0:
    type: physical
    match-id: eno1
    hwaddr: "52:54:00:12:34:56"
  eth1:
    type: physical
    match-id: eno2
    hwaddr: "52:54:00:12:34:57"
    network:
      dhcp4: true
  bond0:
    type: bond
    match-id: bond0
    interfaces: [eth1, eth0]
    parameters:
      mode: 802.3ad
  br0:
    type: bridge
    match-id: br0
    interfaces: [bond0]
    network:
      addresses: [192.168.1.10/24]
      gateway4: 192.168.1.1
      nameservers:
        search: [example.com]
        addresses: [192.168.1.1]
  br0.100:
    type: vlan
    match-id: br0.100
    interfaces: [br0]
    parameters:
      id: 100
    network:
      dhcp4: true
  br0.200:
    type: vlan
    match-id: br0.200
    interfaces: [br0]
    parameters:
      id: 200
"""
