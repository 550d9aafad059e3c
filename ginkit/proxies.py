"""Trusted proxy networks and client IP resolution from forwarding headers."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from typing import Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

DEFAULT_TRUSTED_PROXIES: tuple[str, ...] = ("0.0.0.0/0", "::/0")


def parse_ip(ip: str | IPAddress) -> IPAddress | None:
    """Parse an IP address, returning IPv4-mapped IPv6 addresses as IPv4.

    Returns None when ``ip`` is not a valid address.
    """
    if isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        addr: IPAddress = ip
    else:
        if not isinstance(ip, str) or "%" in ip:
            return None
        try:
            addr = ipaddress.ip_address(ip)
        except ValueError:
            return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def _host_network(addr: IPAddress) -> IPNetwork:
    if isinstance(addr, ipaddress.IPv4Address):
        return ipaddress.IPv4Network((addr, addr.max_prefixlen))
    return ipaddress.IPv6Network((addr, addr.max_prefixlen))


def _parse_network(text: str) -> IPNetwork:
    address, _, prefix = text.partition("/")
    error = ValueError(f"invalid CIDR address: {text}")
    if not prefix.isascii() or not prefix.isdigit() or "%" in address:
        raise error
    try:
        addr = ipaddress.ip_address(address)
    except ValueError:
        raise error from None
    bits = int(prefix)
    if bits > addr.max_prefixlen:
        raise error
    if isinstance(addr, ipaddress.IPv4Address):
        return ipaddress.IPv4Network((addr, bits), strict=False)
    if addr.ipv4_mapped is not None and bits >= 96:
        return ipaddress.IPv4Network((addr.ipv4_mapped, bits - 96), strict=False)
    return ipaddress.IPv6Network((addr, bits), strict=False)


def prepare_trusted_cidrs(proxies: Iterable[str] | None) -> list[IPNetwork] | None:
    """Turn addresses and CIDRs into networks; a bare address becomes a host network.

    Returns None for None. Raises ValueError for an entry that does not parse.
    """
    if proxies is None:
        return None
    networks: list[IPNetwork] = []
    for proxy in proxies:
        if "/" not in proxy:
            addr = parse_ip(proxy)
            if addr is None:
                raise ValueError(f"invalid IP address: {proxy}")
            networks.append(_host_network(addr))
        else:
            networks.append(_parse_network(proxy))
    return networks


class TrustedProxies:
    """The set of proxy networks whose forwarding headers are believed.

    By default every address is trusted. ``None`` disables the feature.
    Raises ValueError if any entry is not a valid address or CIDR.
    """

    def __init__(self, proxies: Iterable[str] | None = DEFAULT_TRUSTED_PROXIES) -> None:
        self.proxies: list[str] | None = None if proxies is None else list(proxies)
        self.cidrs: list[IPNetwork] | None = prepare_trusted_cidrs(self.proxies)

    def is_trusted(self, ip: str | IPAddress) -> bool:
        """Whether ``ip`` lies in one of the trusted networks."""
        if self.cidrs is None:
            return False
        addr = parse_ip(ip)
        if addr is None:
            return False
        return any(addr in network for network in self.cidrs)

    def is_unsafe(self) -> bool:
        """Whether every IPv4 or every IPv6 address is trusted."""
        return self.is_trusted("0.0.0.0") or self.is_trusted("::")

    def client_ip_from_header(self, header: str) -> str | None:
        """Pick the client address out of an X-Forwarded-For style header.

        Entries are checked from the right; the first one that is not a
        trusted proxy, or the leftmost one, is the client. Returns None when
        the header is empty or holds an invalid address before that point.
        """
        if not header:
            return None
        items = header.split(",")
        for position, item in reversed(list(enumerate(items))):
            candidate = item.strip()
            if parse_ip(candidate) is None:
                break
            if position == 0 or not self.is_trusted(candidate):
                return candidate
        return None

    def __repr__(self) -> str:
        return f"TrustedProxies({self.proxies!r})"