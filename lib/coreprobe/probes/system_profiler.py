"""Probe for macOS, based on the system_profiler hardware report."""

from .base_classes import ProbePlugin, ProbeResult, to_int
from .parsers import parse_dict

CORES_FIELD = 'Total Number of Cores'
PROCESSORS_FIELD = 'Number of Processors'


class SystemProfilerProbe(ProbePlugin):
    """This takes priority over the sysctl probe on darwin. The two tools
    have been seen to report different core counts on the same machine,
    and the profiler's count is the one we trust there."""

    def __init__(self):
        super().__init__(
            name='system_profiler',
            description="Reads the macOS system_profiler hardware overview.",
            platforms=['darwin'],
            priority=self.PRIO_COMMON)

    @staticmethod
    def parse(text) -> ProbeResult:
        """Pull the core and processor fields from the indented report."""

        fields = parse_dict(text, ':')

        return ProbeResult(
            cores=to_int(fields.get(CORES_FIELD)),
            processors=to_int(fields.get(PROCESSORS_FIELD)))

    def _get(self):
        return self.parse(self.run_command(
            ['system_profiler', 'SPHardwareDataType']))
