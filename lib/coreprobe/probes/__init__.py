"""Builtin cpu probe plugins and utilities. These are registered manually for
speed."""

from . import base_classes
from .base_classes import ProbePlugin, ProbeResult, FunctionProbe, to_int
from .cpuinfo import CPUInfoProbe
from .sysctl import SysctlProbe
from .system_profiler import SystemProfilerProbe
from .wmic import WMICProbe

_builtin_probes = [
    CPUInfoProbe,
    WMICProbe,
    SystemProfilerProbe,
    SysctlProbe,
]


def register_core_plugins():
    """Add all builtin probes and activate them."""

    for cls in _builtin_probes:
        obj = cls()
        obj.activate()
