from coreprobe import unittest
from coreprobe import errors
from coreprobe.probes import ProbeResult

import pickle


class ErrorTests(unittest.ProbeTestCase):
    """Test functionality of coreprobe specific errors."""

    def test_error_pickling(self):
        """Check that all of the coreprobe errors pickle and unpickle correctly."""

        prior_error = ValueError("hiya")

        base_args = ("foo", )
        base_kwargs = {'prior_error': prior_error, 'data': {"foo": "bar"}}

        spec_args = {
            'ArgumentConflict': (('get_cpu_info', ('cores_only', 'processors_only')),
                                 {'prior_error': prior_error}),
            'DelegateUnavailable': (('unknown-os',), {}),
            'DelegateFailure': (('broken', ProbeResult(0, 4)),
                                {'prior_error': prior_error}),
            'DelegateTimeout': (('slow', 3.5), {'data': {'cmd': 'sysctl'}}),
        }

        exc_classes = []
        for name in dir(errors):
            obj = getattr(errors, name)
            if (isinstance(obj, type)
                    and issubclass(obj, errors.CoreProbeError)):
                exc_classes.append(obj)

        for exc_class in exc_classes:
            exc_name = exc_class.__name__

            args, kwargs = spec_args.get(exc_name, (base_args, base_kwargs))

            inst = exc_class(*args, **kwargs)

            p_str = pickle.dumps(inst)

            try:
                new_inst = pickle.loads(p_str)
            except TypeError:
                self.fail("Failed to reconstitute exception '{}'".format(exc_name))

            self.assertEqual(inst, new_inst)
            self.assertEqual(str(inst), str(new_inst))

    def test_pformat(self):
        """Nested errors are all included in the formatted message."""

        inner = errors.DelegateTimeout('sysctl', 3)
        outer = errors.DelegateFailure('wrapper', prior_error=inner)
        outer_most = errors.CoreProbeError(
            "Query failed.", prior_error=outer, data={'platform': 'freebsd'})

        formatted = outer_most.pformat()

        self.assertIn('Query failed.', formatted)
        self.assertIn("'platform': 'freebsd'", formatted)
        self.assertIn("Cpu probe 'wrapper' failed to run.", formatted)
        self.assertIn("within 3 seconds", formatted)

        try:
            raise errors.CoreProbeError('hi')
        except errors.CoreProbeError as err:
            self.assertIn('Traceback', err.pformat(show_traceback=True))

    def test_messages(self):
        """Each error names the thing that went wrong."""

        self.assertIn("'unknown-os'", str(errors.DelegateUnavailable('unknown-os')))
        self.assertIn('ProbeResult(cores=0, processors=4)',
                      str(errors.DelegateFailure('broken', ProbeResult(0, 4))))
        self.assertIn("'cores_only' and 'processors_only'",
                      str(errors.ArgumentConflict('get_cpu_info')))

    def test_equality(self):
        """Errors compare by type and content, including their causes."""

        self.assertEqual(errors.DelegateTimeout('sysctl', 3),
                         errors.DelegateTimeout('sysctl', 3))
        self.assertNotEqual(errors.DelegateTimeout('sysctl', 3),
                            errors.DelegateTimeout('sysctl', 4))
        self.assertNotEqual(errors.DelegateTimeout('sysctl', 3),
                            errors.DelegateFailure('sysctl'))

        self.assertEqual(
            errors.DelegateFailure('wmic', prior_error=OSError('gone')),
            errors.DelegateFailure('wmic', prior_error=OSError('gone')))
        self.assertNotEqual(
            errors.DelegateFailure('wmic', prior_error=OSError('gone')),
            errors.DelegateFailure('wmic', prior_error=ValueError('gone')))

    def test_pformat_indent(self):
        """Each cause is indented below the error it caused."""

        err = errors.DelegateFailure(
            'cpuinfo', prior_error=OSError("No such file: /proc/cpuinfo"))

        lines = err.pformat().split('\n')
        self.assertEqual(lines[0], "Cpu probe 'cpuinfo' failed to run.")
        self.assertEqual(lines[1], "  No such file: /proc/cpuinfo")
