"""Tests for the built-in probes and their parsing rules."""

import subprocess
import sys
import unittest
from unittest import mock

from coreprobe import query
from coreprobe.errors import CoreProbeError, DelegateFailure, DelegateTimeout
from coreprobe.probes import (CPUInfoProbe, ProbePlugin, ProbeResult,
                              SysctlProbe, SystemProfilerProbe, WMICProbe,
                              to_int)
from coreprobe.probes.parsers import parse_dict, parse_pairs
from coreprobe.unittest import ProbeTestCase


class ProbeTests(ProbeTestCase):

    OUTPUTS = ProbeTestCase.TEST_DATA_ROOT/'outputs'

    def _output(self, name):
        return (self.OUTPUTS/name).read_text()

    def test_to_int(self):
        """Text to int conversion never fails."""

        tests = {
            '4': 4,
            ' 16 \r': 16,
            '12 (8 performance and 4 efficiency)': 12,
            '-1': -1,
            '': 0,
            'lots': 0,
            None: 0,
            7: 7,
        }

        for value, expected in tests.items():
            self.assertEqual(to_int(value), expected)

    def test_parse_pairs(self):
        """Lines are split on the first separator only."""

        text = "a: 1\n\nHardware:\nb : x: y\nnot a pair\n : orphan\n"

        self.assertEqual(parse_pairs(text),
                         [('a', '1'), ('Hardware', ''), ('b', 'x: y')])
        self.assertEqual(parse_dict("k=1\nk=2", '='), {'k': '2'})

    def test_cpuinfo_parse(self):
        """Processors are counted, cores are distinct core ids."""

        result = CPUInfoProbe.parse(self._output('cpuinfo_ht.txt'))
        self.assertEqual(result, ProbeResult(cores=2, processors=4))

        # No 'core id' lines at all means no cores.
        result = CPUInfoProbe.parse("processor\t: 0\nprocessor\t: 1\n")
        self.assertEqual(result, ProbeResult(cores=0, processors=2))

    def test_wmic_parse(self):
        """Each socket's record is added up."""

        result = WMICProbe.parse(self._output('wmic_2socket.txt'))
        self.assertEqual(result, ProbeResult(cores=8, processors=16))

        result = WMICProbe.parse("NumberOfCores=2\r\nNumberOfLogicalProcessors=4")
        self.assertEqual(result, ProbeResult(cores=2, processors=4))

    def test_system_profiler_parse(self):
        """The two named fields are read from the hardware overview."""

        result = SystemProfilerProbe.parse(self._output('system_profiler.txt'))
        self.assertEqual(result, ProbeResult(cores=6, processors=1))

        # Newer reports drop the processor count entirely.
        result = SystemProfilerProbe.parse(
            self._output('system_profiler_arm.txt'))
        self.assertEqual(result, ProbeResult(cores=12, processors=0))

    def test_sysctl_parse(self):
        """The two OIDs are read directly."""

        result = SysctlProbe.parse("hw.physicalcpu: 2\nhw.logicalcpu: 4")
        self.assertEqual(result, ProbeResult(cores=2, processors=4))

        result = SysctlProbe.parse(self._output('sysctl.txt'))
        self.assertEqual(result, ProbeResult(cores=2, processors=4))

        result = SysctlProbe.parse("sysctl: unknown oid 'hw.physicalcpu'")
        self.assertEqual(result, ProbeResult(cores=0, processors=0))

    def test_cpuinfo_probe(self):
        """The cpuinfo probe reads /proc/cpuinfo."""

        cpuinfo = self._output('cpuinfo_ht.txt')
        with mock.patch.object(CPUInfoProbe, 'read_file',
                               return_value=cpuinfo) as read_file:
            self.assertEqual(query.query(platform='linux'), ProbeResult(2, 4))

        read_file.assert_called_once_with('/proc/cpuinfo')

    def test_command_probes(self):
        """Command based probes run the right command with the timeout."""

        tests = [
            ('windows-nt', 'wmic_2socket.txt', 'wmic', ProbeResult(8, 16)),
            ('darwin', 'system_profiler.txt', 'system_profiler',
             ProbeResult(6, 1)),
            ('freebsd', 'sysctl.txt', 'sysctl', ProbeResult(2, 4)),
        ]

        for platform, out_file, command, expected in tests:
            raw = (self.OUTPUTS/out_file).read_bytes()
            with mock.patch('subprocess.check_output',
                            return_value=raw) as check_output:
                self.assertEqual(
                    query.query(platform=platform, timeout=3), expected)

            args, kwargs = check_output.call_args
            self.assertEqual(args[0][0], command)
            self.assertEqual(kwargs['timeout'], 3)

    def test_command_failures(self):
        """Missing tools, failing tools, and slow tools are all errors."""

        errors = [
            (FileNotFoundError(2, "No such file", 'sysctl'), DelegateFailure),
            (subprocess.CalledProcessError(1, ['sysctl']), DelegateFailure),
            (subprocess.TimeoutExpired(['sysctl'], 3), DelegateTimeout),
        ]

        for error, exc_type in errors:
            with mock.patch('subprocess.check_output', side_effect=error):
                with self.assertRaises(exc_type) as context:
                    query.query(platform='freebsd', timeout=3)

            self.assertEqual(context.exception.probe_name, 'sysctl')
            self.assertIs(context.exception.prior_error, error)

    @unittest.skipIf(sys.platform == 'win32', "Needs a posix sleep command.")
    def test_real_timeout(self):
        """A real command that outlives the timeout is stopped."""

        class SleepyProbe(ProbePlugin):
            def __init__(self):
                super().__init__('sleepy', "Sleeps.", ['sleepy-os'])

            def _get(self):
                return self.run_command(['sleep', '5'])

        SleepyProbe().activate()

        with self.assertRaises(DelegateTimeout):
            query.query(platform='sleepy-os', timeout=0.2)

    def test_bad_name(self):
        """Probe names are restricted."""

        with self.assertRaises(CoreProbeError):
            ProbePlugin('no spaces', 'bad', ['bad-os'])

    def test_coerce(self):
        """Probe results can come back in a few shapes."""

        self.assertEqual(ProbeResult.coerce({'cores': 1, 'processors': 2}),
                         ProbeResult(1, 2))
        self.assertEqual(ProbeResult.coerce([1, 2]), ProbeResult(1, 2))
        self.assertEqual(ProbeResult.coerce({'processors': 2}),
                         ProbeResult(0, 2))

        for bad in None, 3, (1, 2, 3), 'ab':
            with self.assertRaises(TypeError):
                ProbeResult.coerce(bad)
