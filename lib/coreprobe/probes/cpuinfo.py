"""Probe for Linux and Cygwin, based on /proc/cpuinfo."""

from .base_classes import ProbePlugin, ProbeResult
from .parsers import parse_pairs

CPUINFO_PATH = '/proc/cpuinfo'


class CPUInfoProbe(ProbePlugin):

    def __init__(self):
        super().__init__(
            name='cpuinfo',
            description="Counts the processor records in /proc/cpuinfo.",
            platforms=['linux', 'cygwin'],
            priority=self.PRIO_CORE)

    @staticmethod
    def parse(text) -> ProbeResult:
        """Every logical processor has a 'processor' line. Cores are the
        distinct 'core id' values."""

        processors = 0
        core_ids = set()

        for key, value in parse_pairs(text, ':'):
            if key == 'processor':
                processors += 1
            elif key == 'core id':
                core_ids.add(value)

        return ProbeResult(cores=len(core_ids), processors=processors)

    def _get(self):
        return self.parse(self.read_file(CPUINFO_PATH))
