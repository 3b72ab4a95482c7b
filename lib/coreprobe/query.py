"""Query the host's core and processor counts.

A query resolves the current platform to a probe through the registry, runs
that probe, checks that both counts are positive integers, and returns
whichever part of the result was asked for::

    from coreprobe import query

    result = query.query()          # ProbeResult(cores=4, processors=8)
    cores = query.query_cores()     # 4
    procs = query.query_processors()  # 8

Nothing is cached; each query runs the probe again.
"""

import logging

from coreprobe import config
from coreprobe import platforms
from coreprobe import registry
from coreprobe.enums import QueryMode
from coreprobe.errors import (ArgumentConflict, DelegateFailure,
                              DelegateUnavailable)
from coreprobe.probes.base_classes import ProbeResult

LOGGER = logging.getLogger(__name__)


def validate(result) -> bool:
    """Return whether the result has two positive integer counts."""

    if not isinstance(result, ProbeResult):
        return False

    for value in result:
        # Bools are ints, but never a valid count.
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        if value <= 0:
            return False

    return True


def query(mode=QueryMode.BOTH, platform=None, timeout=config.DEFAULT_TIMEOUT):
    """Get the cpu counts for this host.

    :param QueryMode mode: What to return.
    :param str platform: The platform key to query. Defaults to the key for
        the running host. Configured overrides are applied by the caller.
    :param timeout: Seconds to allow any command the probe runs. None or 0
        means wait forever.
    :returns: A ProbeResult for QueryMode.BOTH, otherwise the single
        requested count as an int.
    :raises DelegateUnavailable: When there's no probe for the platform.
    :raises DelegateFailure: When the probe fails or returns a bad result.
    :raises DelegateTimeout: When the probe's command takes too long.
    """

    mode = QueryMode(mode)

    key = platforms.get_platform_key(platform)

    probe = registry.resolve(key)
    if probe is None:
        raise DelegateUnavailable(key)

    result = probe.get(timeout=timeout or None)

    if not validate(result):
        LOGGER.error("Probe %s for platform '%s' returned %r.",
                     probe.name, key, result)
        raise DelegateFailure(probe.name, result)

    LOGGER.debug("Probe %s for platform '%s' found %d cores and %d "
                 "processors.", probe.name, key, result.cores,
                 result.processors)

    if mode is QueryMode.CORES:
        return result.cores
    elif mode is QueryMode.PROCESSORS:
        return result.processors
    else:
        return result


def query_both(platform=None, timeout=config.DEFAULT_TIMEOUT) -> ProbeResult:
    """Return both counts as a ProbeResult."""

    return query(QueryMode.BOTH, platform=platform, timeout=timeout)


def query_cores(platform=None, timeout=config.DEFAULT_TIMEOUT) -> int:
    """Return the number of physical cores."""

    return query(QueryMode.CORES, platform=platform, timeout=timeout)


def query_processors(platform=None, timeout=config.DEFAULT_TIMEOUT) -> int:
    """Return the number of logical processors."""

    return query(QueryMode.PROCESSORS, platform=platform, timeout=timeout)


def get_cpu_info(cores_only=False, processors_only=False, platform=None,
                 timeout=config.DEFAULT_TIMEOUT):
    """Flag based front end to :func:`query`.

    :param bool cores_only: Return just the core count.
    :param bool processors_only: Return just the processor count.
    :raises ArgumentConflict: When both flags are set.
    """

    if cores_only and processors_only:
        raise ArgumentConflict('get_cpu_info', ('cores_only', 'processors_only'))

    if cores_only:
        mode = QueryMode.CORES
    elif processors_only:
        mode = QueryMode.PROCESSORS
    else:
        mode = QueryMode.BOTH

    return query(mode, platform=platform, timeout=timeout)


def register_delegate(platform, probe, priority=registry.PRIO_USER):
    """Add (or replace) the probe used for the given platform key.

    :param str platform: The platform key.
    :param probe: A ProbePlugin, or a zero argument callable returning a
        ProbeResult, a {'cores': n, 'processors': m} dict, or a
        (cores, processors) pair.
    :param int priority: Defaults to the user priority, which outranks every
        built-in probe.
    """

    return registry.register(platform, probe, priority)
