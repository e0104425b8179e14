"""Data models for service selection."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Cancelled(Enum):
    """Returned by a dialog when the user dismisses it. Not an error."""

    TOKEN = "cancelled"


CANCELLED = Cancelled.TOKEN


@dataclass(frozen=True)
class ServiceOption:
    tag: str
    description: str
    default_enabled: bool = False


class HardwareProfile(Enum):
    CPU = "cpu"
    GPU_NVIDIA = "gpu-nvidia"
    GPU_AMD = "gpu-amd"

    @property
    def description(self) -> str:
        return {
            HardwareProfile.CPU: "CPU (Recommended for most users)",
            HardwareProfile.GPU_NVIDIA: "NVIDIA GPU (Requires NVIDIA drivers & CUDA)",
            HardwareProfile.GPU_AMD: "AMD GPU (Requires ROCm drivers)",
        }[self]


@dataclass
class ResolvedProfiles:
    """Final profile set: selected services plus an optional Ollama hardware pick.

    The hardware pick is kept apart from ``services`` so a service tag that
    happens to equal a hardware value is never mistaken for it.
    """

    services: List[str] = field(default_factory=list)
    hardware: Optional[HardwareProfile] = None

    @property
    def tags(self) -> List[str]:
        tags = list(self.services)
        if self.hardware is not None:
            tags.append(self.hardware.value)
        return tags

    @property
    def value(self) -> str:
        return ",".join(self.tags)

    @property
    def is_empty(self) -> bool:
        return not self.tags

    def summary_lines(self) -> List[str]:
        lines = [f"  - {tag}" for tag in self.services]
        if self.hardware is not None:
            lines.append(f"  - Ollama ({self.hardware.value} profile)")
        return lines
