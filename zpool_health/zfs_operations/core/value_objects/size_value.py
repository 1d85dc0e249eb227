from dataclasses import dataclass
import re


@dataclass(frozen=True)
class SizeValue:
    """Size or count value object parsed from `zpool` output columns"""
    bytes: int

    # zpool prints counts and sizes with the same 1024-based suffixes
    _UNITS = {
        "B": 1,
        "K": 1024,
        "M": 1024**2,
        "G": 1024**3,
        "T": 1024**4,
        "P": 1024**5,
        "E": 1024**6,
    }

    def __post_init__(self):
        if self.bytes < 0:
            raise ValueError("Size cannot be negative")

    @classmethod
    def from_zfs_string(cls, size_str: str) -> 'SizeValue':
        """Parse ZFS size string (e.g., '1.5G', '500M', '0', '-') to an integer"""
        size_str = size_str.strip().upper()

        if size_str in ["-", "0", "0B", ""]:
            return cls(0)

        match = re.match(r'^(\d+(?:\.\d+)?)\s*([BKMGTPE]?)$', size_str)
        if not match:
            raise ValueError(f"Cannot parse size: {size_str}")

        numeric_value = float(match.group(1))
        unit = match.group(2) or "B"

        return cls(int(numeric_value * cls._UNITS[unit]))

    def __int__(self) -> int:
        return self.bytes

    def __str__(self) -> str:
        return str(self.bytes)
