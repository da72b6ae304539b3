from .assembler import STATUS_ONLINE, SnapshotAssembler, apply_identity

__all__ = [
    "STATUS_ONLINE",
    "SnapshotAssembler",
    "apply_identity",
]
