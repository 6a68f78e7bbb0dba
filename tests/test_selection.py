"""
Unit tests for netlocator/network/selection.py

The priority order: tunnel, wired (Ethernet, USB LAN, other), wireless,
default route.
"""

import itertools

import pytest
from unittest.mock import MagicMock

from netlocator.network.models import InterfaceDescriptor, InterfaceStatus, PortRole
from netlocator.network.selection import select_interface


def up(descriptor, address="10.0.0.2"):
    return InterfaceStatus(descriptor=descriptor, address=address, active=True)


def down(descriptor):
    return InterfaceStatus(descriptor=descriptor)


@pytest.mark.unit
class TestSelectInterface:
    def test_tunnel_always_wins(self, descriptors):
        others = [up(descriptors["wifi"]), up(descriptors["ethernet"]), up(descriptors["usb_lan"])]
        tunnel = up(descriptors["vpn"], "10.1.2.3")

        for size in range(len(others) + 1):
            for subset in itertools.combinations(others, size):
                for position in range(len(subset) + 1):
                    statuses = list(subset)
                    statuses.insert(position, tunnel)
                    assert select_interface(statuses) is tunnel

    def test_inactive_tunnel_ignored(self, descriptors):
        wifi = up(descriptors["wifi"])
        assert select_interface([down(descriptors["vpn"]), wifi]) is wifi

    def test_ethernet_preferred_over_wireless(self, descriptors):
        wifi = up(descriptors["wifi"])
        ethernet = up(descriptors["ethernet"])

        assert select_interface([wifi, ethernet]) is ethernet
        assert select_interface([ethernet, wifi]) is ethernet

    def test_ethernet_preferred_over_usb_lan(self, descriptors):
        usb = up(descriptors["usb_lan"])
        ethernet = up(descriptors["ethernet"])

        assert select_interface([usb, ethernet]) is ethernet

    def test_usb_lan_preferred_over_other_wired(self, descriptors):
        dock = up(InterfaceDescriptor("en9", PortRole.WIRED, "Dock LAN Adapter"))
        usb = up(descriptors["usb_lan"])

        assert select_interface([dock, usb]) is usb

    def test_any_wired_before_wireless(self, descriptors):
        dock = up(InterfaceDescriptor("en9", PortRole.WIRED, "Dock LAN Adapter"))
        wifi = up(descriptors["wifi"])

        assert select_interface([wifi, dock]) is dock

    def test_wireless_when_nothing_else(self, descriptors):
        wifi = up(descriptors["wifi"])
        statuses = [down(descriptors["ethernet"]), wifi, down(descriptors["vpn"])]

        assert select_interface(statuses) is wifi

    def test_default_route_last_resort(self, descriptors):
        bridge = up(InterfaceDescriptor("bridge0", PortRole.OTHER, "Thunderbolt Bridge"))
        lookup = MagicMock(return_value=bridge)

        assert select_interface([down(descriptors["wifi"]), bridge], lookup) is bridge
        lookup.assert_called_once_with()

    def test_default_route_not_consulted_when_tier_matches(self, descriptors):
        lookup = MagicMock()
        select_interface([up(descriptors["wifi"])], lookup)
        lookup.assert_not_called()

    def test_inactive_default_route_rejected(self, descriptors):
        lookup = MagicMock(return_value=down(descriptors["ethernet"]))
        assert select_interface([down(descriptors["wifi"])], lookup) is None

    def test_nothing_active(self, descriptors):
        statuses = [down(d) for d in descriptors.values()]
        assert select_interface(statuses) is None
        assert select_interface([]) is None
        assert select_interface([], MagicMock(return_value=None)) is None
