"""Probe for Windows, using a WMI query through wmic."""

from .base_classes import ProbePlugin, ProbeResult, to_int
from .parsers import parse_pairs

CORES_FIELD = 'NumberOfCores'
PROCESSORS_FIELD = 'NumberOfLogicalProcessors'


class WMICProbe(ProbePlugin):

    def __init__(self):
        super().__init__(
            name='wmic',
            description="Queries the Win32_Processor WMI class with wmic.",
            platforms=['windows-nt'],
            priority=self.PRIO_CORE)

    @staticmethod
    def parse(text) -> ProbeResult:
        """Read the two fields from 'key=value' list output. There is one
        record per socket, so the counts are totalled."""

        cores = processors = 0

        for key, value in parse_pairs(text, '='):
            if key == CORES_FIELD:
                cores += to_int(value)
            elif key == PROCESSORS_FIELD:
                processors += to_int(value)

        return ProbeResult(cores=cores, processors=processors)

    def _get(self):
        out = self.run_command(
            ['wmic', 'cpu', 'get',
             '{},{}'.format(CORES_FIELD, PROCESSORS_FIELD),
             '/format:list'])

        return self.parse(out)
