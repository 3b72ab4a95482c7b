"""This library manages the discovery of cpu probe plugins.

Probe plugins live in the ``plugins`` directory of each configured config
directory. Each needs a ``.yapsy-plugin`` file alongside the module, and the
module must define a subclass of
:class:`coreprobe.probes.base_classes.ProbePlugin` with a no argument
``__init__``. The built-in probes are registered directly, without going
through yapsy.
"""

import logging
import traceback

from coreprobe import registry
from coreprobe.errors import PluginError
from coreprobe.probes import ProbePlugin
from yapsy import PluginManager

LOGGER = logging.getLogger(__name__)

_PLUGIN_MANAGER = None

PLUGIN_CATEGORIES = {
    'probe': ProbePlugin,
}

__all__ = [
    "PluginError",
    "initialize_plugins",
    "list_plugins",
]


def initialize_plugins(cfg):
    """Initialize the plugin system, and activate plugins in all known plugin
    directories (except those specifically disabled in the config). Should
    only be run once per process.

    :param cfg: The coreprobe configuration.
    :return: Nothing
    :raises PluginError: When there's an issue with a plugin or the plugin
        system in general.
    """

    global _PLUGIN_MANAGER  # pylint: disable=W0603

    if _PLUGIN_MANAGER is not None:
        LOGGER.warning("Tried to initialize plugins multiple times.")
        return

    # Make sure the core probes are in place first, so plugins can
    # override them.
    registry.list_probes()

    plugin_dirs = [(cfg_dir/'plugins').as_posix()
                   for cfg_dir in cfg.config_dirs]

    try:
        pman = PluginManager.PluginManager(directories_list=plugin_dirs,
                                           categories_filter=PLUGIN_CATEGORIES)

        pman.collectPlugins()
    except Exception as err:
        raise PluginError("Error initializing plugin system.", prior_error=err)

    # Activate each plugin in turn.
    for plugin in pman.getAllPlugins():
        plugin_dot_name = '{p.category}.{p.name}'.format(p=plugin)

        if plugin_dot_name in cfg.disable_plugins:
            LOGGER.info("Skipping disabled plugin %s.", plugin_dot_name)
            continue

        try:
            plugin.plugin_object.activate()
        except Exception as err:
            raise PluginError("Error activating plugin {name}:\n{tb}"
                              .format(name=plugin.name,
                                      tb=traceback.format_exc()),
                              prior_error=err)

        LOGGER.debug("Activated plugin %s from %s.", plugin_dot_name,
                     plugin.path)

    _PLUGIN_MANAGER = pman


def list_plugins():
    """Get the list of plugins by category. These will be yapsy PluginInfo
    objects.

    :return: A dict of plugin categories, each with a dict of plugins by name.
    :raises PluginError: If you don't initialize the plugin system first
    """

    if _PLUGIN_MANAGER is None:
        raise PluginError("Plugin system has not been initialized.")

    plugins = {}
    for category in _PLUGIN_MANAGER.getCategories():
        plugins[category] = {}
        for plugin in _PLUGIN_MANAGER.getPluginsOfCategory(category):
            plugins[category][plugin.name] = plugin

    return plugins


def _reset_plugins():
    """Reset the plugin system. This functionality is for unittests,
    and should never be used in coreprobe proper."""

    global _PLUGIN_MANAGER  # pylint: disable=W0603

    _PLUGIN_MANAGER = None
    registry.reset()
