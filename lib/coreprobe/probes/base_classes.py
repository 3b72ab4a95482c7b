"""Base classes for cpu probes.

Each probe plugin determines the core and processor count for one or more
platforms. Probes only gather and reduce data; deciding whether the result
is usable is left to :func:`coreprobe.query.validate`."""

import inspect
import logging
import re
import subprocess
import threading
from pathlib import Path
from typing import NamedTuple

from coreprobe import registry
from coreprobe.errors import CoreProbeError, DelegateFailure, DelegateTimeout
from yapsy import IPlugin

LOGGER = logging.getLogger(__name__)


class ProbeResult(NamedTuple):
    """The core and processor counts a probe found."""

    cores: int
    processors: int

    def as_dict(self):
        """Return the result as a plain dictionary."""

        return {'cores': self.cores, 'processors': self.processors}

    @classmethod
    def coerce(cls, value):
        """Convert a probe's return value to a ProbeResult. Mappings need
        'cores' and 'processors' keys, sequences need exactly two items.
        Missing values become zero so that validation can reject them.

        :raises TypeError: When the value can't be interpreted at all.
        """

        if isinstance(value, cls):
            return value

        if isinstance(value, dict):
            return cls(value.get('cores', 0), value.get('processors', 0))

        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(*value)

        raise TypeError("Can't interpret {!r} as a probe result.".format(value))


INT_RE = re.compile(r'^\s*([+-]?\d+)')


def to_int(value) -> int:
    """Convert a tool's text output to an integer, returning 0 for anything
    missing or unparseable. Trailing text after the number is ignored
    (system_profiler reports '10 (8 performance and 2 efficiency)')."""

    if value is None:
        return 0

    match = INT_RE.match(str(value))
    if match is None:
        return 0

    return int(match.group(1))


class ProbePlugin(IPlugin.IPlugin):
    """Each probe plugin provides the cpu counts for the platforms it's
    registered under. Override ``_get()`` to implement the probe."""

    PRIO_CORE = registry.PRIO_CORE
    PRIO_COMMON = registry.PRIO_COMMON
    PRIO_USER = registry.PRIO_USER

    NAME_RE = re.compile(r'^[a-zA-Z0-9_.-]+$')

    def __init__(self, name, description, platforms, priority=PRIO_COMMON):
        """Initialize the probe plugin instance. This should be overridden in
        each final plugin.

        :param str name: The name of the probe.
        :param str description: Short description of how the probe works.
        :param list platforms: The platform keys this probe handles.
        :param int priority: Priority of the plugin when two plugins handle
            the same platform.
        """

        super().__init__()

        if self.NAME_RE.match(name) is None:
            raise CoreProbeError("Invalid probe name: '{}'".format(name))

        if isinstance(platforms, str):
            platforms = [platforms]

        self.name = name
        self.description = description
        self.platforms = list(platforms)
        self.priority = priority
        self.path = inspect.getfile(self.__class__)
        # Each query passes its own timeout, and one probe object may serve
        # queries from several threads.
        self._call = threading.local()

    def _get(self):
        """This should be overridden to gather the raw data and reduce it
        to a ProbeResult."""

        raise NotImplementedError

    def get(self, timeout=None):
        """Run the probe.

        :param timeout: Seconds to allow any command the probe runs. None
            means wait forever.
        :rtype: ProbeResult
        :raises DelegateTimeout: When a probe command exceeds the timeout.
        :raises DelegateFailure: When the probe raises any other error.
        """

        LOGGER.debug("Running cpu probe %s.", self.name)

        prev_timeout = getattr(self._call, 'timeout', None)
        self._call.timeout = timeout
        try:
            return ProbeResult.coerce(self._get())
        except subprocess.TimeoutExpired as err:
            raise DelegateTimeout(self.name, timeout, prior_error=err)
        except CoreProbeError:
            raise
        except Exception as err:
            raise DelegateFailure(self.name, prior_error=err)
        finally:
            self._call.timeout = prev_timeout

    @property
    def timeout(self):
        """The timeout of the query running in this thread, if any."""

        return getattr(self._call, 'timeout', None)

    def run_command(self, cmd) -> str:
        """Run the given command and return its decoded stdout. The command
        is killed if it outlives the current query's timeout.

        :param list cmd: The command and its arguments.
        """

        out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL,
                                      timeout=self.timeout)
        return out.decode('utf8', errors='replace')

    @staticmethod
    def read_file(path) -> str:
        """Return the contents of the given (pseudo) file."""

        with Path(path).open('r', errors='replace') as file:
            return file.read()

    def activate(self):
        """Register this probe under each of its platform keys."""

        for key in self.platforms:
            registry.register(key, self, self.priority)

        self.is_activated = True

    def deactivate(self):
        """Remove this probe from the registry wherever it's registered."""

        for key in self.platforms:
            registry.unregister(key, self)

        self.is_activated = False

    def __repr__(self):
        return '<{} from file {} named {}, priority {}>'.format(
            self.__class__.__name__,
            self.path,
            self.name,
            self.priority
        )


class FunctionProbe(ProbePlugin):
    """Wraps a plain zero argument callable so it can be registered as a
    probe."""

    def __init__(self, func, name=None, priority=ProbePlugin.PRIO_USER):

        if name is None:
            name = getattr(func, '__name__', None) or type(func).__name__
            name = re.sub(r'[^a-zA-Z0-9_.-]', '_', name)

        super().__init__(
            name=name,
            description=(func.__doc__ or '').strip(),
            platforms=[],
            priority=priority)

        self.func = func
        try:
            self.path = inspect.getfile(func)
        except TypeError:
            self.path = '<unknown>'

    def _get(self):
        return self.func()
