"""
Error counter aggregation over the config device tree.
"""
from typing import Dict, List

from ..core.entities.evaluation import ErrorCounts
from ..core.entities.status_report import DeviceNode, SparesGroup


def _own_counts(node: DeviceNode) -> ErrorCounts:
    return ErrorCounts(
        cksum_err=node.cksum_err or 0,
        read_err=node.read_err or 0,
        write_err=node.write_err or 0,
    )


def _fold(node: DeviceNode) -> ErrorCounts:
    if isinstance(node, SparesGroup):
        return ErrorCounts()
    total = _own_counts(node)
    for child in node.children.values():
        total = total + _fold(child)
    return total


def aggregate(config: Dict[str, DeviceNode]) -> ErrorCounts:
    """
    Sum read/write/checksum counters over every node of the tree.

    Each node contributes its own counters, parents included; the spares
    section contributes nothing.
    """
    total = ErrorCounts()
    for node in config.values():
        total = total + _fold(node)
    return total


def in_use_spares(config: Dict[str, DeviceNode]) -> List[DeviceNode]:
    """Spare devices whose state is anything other than AVAIL."""
    spares: List[DeviceNode] = []
    for node in config.values():
        if isinstance(node, SparesGroup):
            spares.extend(node.in_use())
    return spares
