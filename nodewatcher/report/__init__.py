from .errors import ReportError
from .delivery import deliver
from .envelope import build_envelope, primary_mac
from .xml_encoder import encode_snapshot, format_float

__all__ = [
    "ReportError",
    "deliver",
    "build_envelope",
    "primary_mac",
    "encode_snapshot",
    "format_float",
]
