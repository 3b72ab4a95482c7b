"""The delegate registry maps platform keys to the cpu probe that handles
that platform.

The registry is process wide. It's filled with the built-in probes on first
use, and can be extended at any time with :func:`register`. A registration
replaces an existing one for the same key unless the existing probe has a
higher priority."""

# pylint: disable=W0603

import logging
import threading

LOGGER = logging.getLogger(__name__)

PRIO_CORE = 0
PRIO_COMMON = 10
PRIO_USER = 20

_LOADED_PROBES = None  # type: dict
_LOCK = threading.RLock()


def _probes() -> dict:
    """Return the probe dict, registering the built-in probes if this
    is the first use. Must be called with the lock held."""

    global _LOADED_PROBES

    if _LOADED_PROBES is None:
        _LOADED_PROBES = {}
        # Imported here, as the probes themselves import this module.
        from coreprobe import probes
        probes.register_core_plugins()

    return _LOADED_PROBES


def register(key, probe, priority=PRIO_USER):
    """Add a probe for the given platform key.

    :param str key: The platform key (as returned by
        :func:`coreprobe.platforms.get_platform_key`).
    :param probe: A ProbePlugin instance, or a zero argument callable that
        returns a ProbeResult (or anything ProbeResult.coerce accepts).
    :param int priority: The priority of this registration. Callers outrank
        every built-in probe by default; plugins pass their own priority
        when they activate.
    :returns: True if the probe was registered, False if it was ignored
        because a higher priority probe is already registered for the key.
    """

    # Imported here to avoid a cycle with the probe base classes.
    from coreprobe.probes.base_classes import ProbePlugin, FunctionProbe

    if not isinstance(key, str) or not key:
        raise ValueError("Platform keys must be non-empty strings, got {!r}"
                         .format(key))

    if not isinstance(probe, ProbePlugin):
        if not callable(probe):
            raise TypeError("Probe for platform '{}' is not callable: {!r}"
                            .format(key, probe))
        probe = FunctionProbe(probe, priority=priority)

    with _LOCK:
        probes = _probes()

        if key in probes:
            old_probe, old_priority = probes[key]
            if priority < old_priority:
                LOGGER.warning(
                    "Probe %s for platform '%s' ignored due to priority; "
                    "keeping %s.", probe.name, key, old_probe.name)
                return False

            LOGGER.info("Probe %s for platform '%s' replaced by %s.",
                        old_probe.name, key, probe.name)
        else:
            LOGGER.debug("Registered probe %s for platform '%s'.",
                         probe.name, key)

        probes[key] = (probe, priority)

    return True


def unregister(key, probe=None):
    """Remove the probe registered for the given key.

    :param str key: The platform key.
    :param probe: Only remove the entry if it is this probe object.
    :returns: True if an entry was removed.
    """

    with _LOCK:
        probes = _probes()

        if key not in probes:
            return False

        if probe is not None and probes[key][0] is not probe:
            return False

        del probes[key]
        return True


def resolve(key):
    """Find the probe for the given platform key.

    :returns: The ProbePlugin registered for the key, or None if there isn't
        one.
    """

    with _LOCK:
        entry = _probes().get(key)

    if entry is None:
        return None

    return entry[0]


def list_probes() -> dict:
    """Return a dict of platform key -> (probe, priority) for every
    registered probe."""

    with _LOCK:
        return dict(_probes())


def reset():
    """Forget every registered probe. The built-in probes will be
    registered again on next use."""

    global _LOADED_PROBES

    with _LOCK:
        _LOADED_PROBES = None
