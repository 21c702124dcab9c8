"""Hosts por defecto para el certificado: `localhost` + IPv4 locales."""

from __future__ import annotations

import socket
from collections.abc import Iterable

import psutil


def get_local_ipv4_addresses() -> list[str]:
    addresses: list[str] = []
    for iface_addrs in psutil.net_if_addrs().values():
        for addr in iface_addrs:
            if addr.family == socket.AF_INET and addr.address not in addresses:
                addresses.append(addr.address)
    return addresses


def get_default_hosts() -> list[str]:
    return unique_hosts(["localhost", *get_local_ipv4_addresses()])


def unique_hosts(hosts: Iterable[str]) -> list[str]:
    """Quita duplicados y vacíos manteniendo el orden original."""

    return list(dict.fromkeys(h.strip() for h in hosts if h and h.strip()))
