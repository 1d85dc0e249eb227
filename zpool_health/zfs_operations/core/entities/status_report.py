"""
Typed view of one pool's `zpool status` report.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, List

SPARES = "spares"
NO_KNOWN_DATA_ERRORS = "No known data errors"


@dataclass
class DeviceNode:
    """A vdev, mirror member or leaf device in the config tree."""
    name: str
    state: Optional[str] = None
    read_err: Optional[int] = None
    write_err: Optional[int] = None
    cksum_err: Optional[int] = None
    children: Dict[str, 'DeviceNode'] = field(default_factory=dict)

    def add_child(self, child: 'DeviceNode') -> 'DeviceNode':
        self.children[child.name] = child
        return child


@dataclass
class SparesGroup(DeviceNode):
    """The top-level `spares` section; members carry only a state."""
    name: str = SPARES

    def in_use(self) -> List[DeviceNode]:
        """Spare members not sitting idle in the AVAIL state."""
        return [spare for spare in self.children.values() if spare.state != 'AVAIL']


@dataclass
class StatusReport:
    """Free-text categories plus the config device tree for one pool."""
    categories: Dict[str, str] = field(default_factory=dict)
    config: Dict[str, DeviceNode] = field(default_factory=dict)

    def has_category(self, name: str) -> bool:
        return name in self.categories

    def get(self, name: str) -> Optional[str]:
        return self.categories.get(name)

    @property
    def pool(self) -> Optional[str]:
        return self.get('pool')

    @property
    def scan(self) -> Optional[str]:
        return self.get('scan')

    @property
    def status(self) -> Optional[str]:
        return self.get('status')

    @property
    def action(self) -> Optional[str]:
        return self.get('action')

    @property
    def errors(self) -> Optional[str]:
        return self.get('errors')

    @property
    def spares(self) -> Optional[SparesGroup]:
        node = self.config.get(SPARES)
        return node if isinstance(node, SparesGroup) else None

    def has_data_errors(self) -> bool:
        """True when the `errors:` line reports anything but a clean pool."""
        return self.errors is not None and self.errors != NO_KNOWN_DATA_ERRORS
