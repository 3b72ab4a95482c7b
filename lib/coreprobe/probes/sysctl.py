"""Probe for the BSDs (and darwin, on request), based on sysctl."""

from .base_classes import ProbePlugin, ProbeResult, to_int
from .parsers import parse_dict

CORES_OID = 'hw.physicalcpu'
PROCESSORS_OID = 'hw.logicalcpu'


class SysctlProbe(ProbePlugin):

    def __init__(self):
        super().__init__(
            name='sysctl',
            description="Queries the hw.physicalcpu and hw.logicalcpu OIDs.",
            platforms=['freebsd', 'openbsd', 'netbsd', 'dragonfly', 'bsd'],
            priority=self.PRIO_CORE)

    @staticmethod
    def parse(text) -> ProbeResult:
        """Read the two OIDs from 'oid: value' lines."""

        fields = parse_dict(text, ':')

        return ProbeResult(
            cores=to_int(fields.get(CORES_OID)),
            processors=to_int(fields.get(PROCESSORS_OID)))

    def _get(self):
        return self.parse(self.run_command(
            ['sysctl', CORES_OID, PROCESSORS_OID]))
