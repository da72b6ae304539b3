from __future__ import annotations

import json

from nodewatcher.config import PROTOCOL_VERSION
from nodewatcher.models.snapshot import Snapshot
from nodewatcher.report.errors import ReportError

XML_DECLARATION = "<?xml version='1.0' standalone='yes'?>"


def primary_mac(snapshot: Snapshot) -> str:
    """MAC address of the first interface, which keys the node at the collector."""
    if not snapshot.interfaces:
        raise ReportError("snapshot has no interfaces to key the report")
    return snapshot.interfaces[0].mac_addr


def build_envelope(snapshot: Snapshot, xml_payload: str) -> str:
    """Wrap the XML report as ``{"64": {"<mac>": "<?xml ...?><data>...</data>"}}``."""
    envelope = {PROTOCOL_VERSION: {primary_mac(snapshot): XML_DECLARATION + xml_payload}}
    return json.dumps(envelope, ensure_ascii=False)
