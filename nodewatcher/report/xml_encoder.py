"""XML encoding of a Snapshot in the collector's wire format.

The collector parses reports by element name and order, so the layout here
is fixed: element order follows the ``system_data`` / ``interface_data`` /
``babel_neighbours`` / ``clients`` schema, empty values are written as
``<x></x>``, and numbers and text are formatted the way the collector's
reference client formats them.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import NamedTuple

from nodewatcher.models.snapshot import Snapshot, SystemData

ROOT_ELEMENT = "data"

_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


class Node(NamedTuple):
    tag: str
    text: str = ""
    children: tuple[Node, ...] = ()


def _is_xml_char(ch: str) -> bool:
    cp = ord(ch)
    return (
        cp in (0x09, 0x0A, 0x0D)
        or 0x20 <= cp <= 0xD7FF
        or 0xE000 <= cp <= 0xFFFD
        or 0x10000 <= cp <= 0x10FFFF
    )


def escape_text(value: str) -> str:
    out = []
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif _is_xml_char(ch):
            out.append(ch)
        else:
            out.append("\ufffd")
    return "".join(out)


def format_float(value: float) -> str:
    """Shortest round-trip representation, exponent form outside [1e-4, 1e6)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign = "-" if value < 0 else ""
    dec = Decimal(repr(abs(value))).normalize()
    _, digit_tuple, exponent = dec.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent  # position of the decimal point
    exp10 = point - 1

    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'-' if exp10 < 0 else '+'}{abs(exp10):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _scalar(value: object) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return format_float(value)
    return str(value)


def _leaf(tag: str, value: object) -> Node:
    return Node(tag, _scalar(value))


def _system_data(sd: SystemData) -> Node:
    children = [
        _leaf("status", sd.status),
        _leaf("hostname", sd.hostname),
        _leaf("description", sd.description),
        Node("geo", children=(_leaf("lat", sd.geo.lat), _leaf("lng", sd.geo.lng))),
        _leaf("position_comment", sd.position_comment),
        _leaf("contact", sd.contact),
        _leaf("hood", sd.hood),
        _leaf("hoodid", sd.hoodid),
        _leaf("distname", sd.distname),
        _leaf("distversion", sd.distversion),
        _leaf("chipset", sd.chipset),
        *(_leaf("cpu", cpu) for cpu in sd.cpu),
        _leaf("model", sd.model),
    ]
    for tag in (
        "memory_total",
        "memory_free",
        "memory_buffering",
        "memory_caching",
        "loadavg",
        "processes",
        "uptime",
        "idletime",
        "local_time",
        "batman_advanced_version",
        "kernel_version",
        "nodewatcher_version",
        "firmware_version",
        "firmware_revision",
        "openwrt_core_revision",
        "openwrt_feeds_packages_revision",
        "vpn_active",
    ):
        children.append(_leaf(tag, getattr(sd, tag)))
    return Node("system_data", children=tuple(children))


def snapshot_tree(snapshot: Snapshot) -> Node:
    interfaces = tuple(
        Node(
            iface.name,
            children=(
                _leaf("name", iface.name),
                _leaf("mtu", iface.mtu),
                _leaf("mac_addr", iface.mac_addr),
                _leaf("traffic_rx", iface.traffic_rx),
                _leaf("traffic_tx", iface.traffic_tx),
            ),
        )
        for iface in snapshot.interfaces
    )
    neighbours = tuple(
        Node(
            "neighbour",
            n.mac_addr,
            children=(_leaf("outgoing_interface", n.outgoing_interface),),
        )
        for n in snapshot.babel_neighbours
    )
    clients = tuple(_leaf(c.interface, c.count) for c in snapshot.clients)

    return Node(
        ROOT_ELEMENT,
        children=(
            _system_data(snapshot.system_data),
            Node("interface_data", children=interfaces),
            _leaf("batman_adv_interfaces", snapshot.batman_adv_interfaces),
            _leaf("batman_adv_originators", snapshot.batman_adv_originators),
            _leaf("batman_adv_gateway_mode", snapshot.batman_adv_gateway_mode),
            _leaf("batman_adv_gateway_list", snapshot.batman_adv_gateway_list),
            Node("babel_neighbours", children=neighbours),
            _leaf("client_count", snapshot.client_count),
            Node("clients", children=clients),
        ),
    )


def _render(node: Node, indent: str | None, depth: int, out: list[str]) -> None:
    pad = indent * depth if indent is not None else ""
    text = escape_text(node.text)
    if not node.children:
        out.append(f"{pad}<{node.tag}>{text}</{node.tag}>")
        return
    out.append(f"{pad}<{node.tag}>{text}")
    for child in node.children:
        _render(child, indent, depth + 1, out)
    out.append(f"{pad}</{node.tag}>")


def encode_snapshot(snapshot: Snapshot, indent: str | None = None) -> str:
    """Serialize ``snapshot``; compact by default, one element per line with ``indent``."""
    out: list[str] = []
    _render(snapshot_tree(snapshot), indent, 0, out)
    return ("\n" if indent is not None else "").join(out)
