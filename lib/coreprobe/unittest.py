"""This module provides a base set of utilities for creating unittests
for coreprobe."""

import logging
import unittest
from pathlib import Path

from coreprobe import config
from coreprobe import plugins


class ProbeTestCase(unittest.TestCase):
    """A unittest.TestCase with coreprobe setup baked in. All coreprobe
unittests (in test/tests) should use this as their base class.

The probe registry and plugin system are reset before and after every test,
so registrations made in one test never leak into another.

:cvar Path LIB_DIR: The Path to coreprobe's lib directory.
:cvar Path ROOT_DIR: The Path to the root of the repository.
:cvar Path TEST_DATA_ROOT: The unit test data directory.
:cvar Path CONFIG_DIR: The config directory used by unit tests.

:ivar config.CoreProbeConfig cfg: A config setup properly for use by unit
    tests. If it needs to be modified, copy it first.
"""

    LIB_DIR = Path(__file__).resolve().parents[1]  # type: Path
    ROOT_DIR = LIB_DIR.parent  # type: Path
    TEST_DATA_ROOT = ROOT_DIR/'test'/'data'  # type: Path
    CONFIG_DIR = TEST_DATA_ROOT/'config_dir'  # type: Path

    def __init__(self, *args, **kwargs):

        self.cfg = self.make_config()
        super().__init__(*args, **kwargs)

    def setUp(self) -> None:
        """Moving from the old camel case names to the standard naming scheme."""

        # pylint: disable=protected-access
        plugins._reset_plugins()
        self.set_up()

    def tearDown(self) -> None:
        self.tear_down()

        # pylint: disable=protected-access
        plugins._reset_plugins()
        for name in 'coreprobe', 'yapsy':
            logging.getLogger(name).handlers.clear()

    def set_up(self):
        """Dummy set up function."""

    def tear_down(self):
        """Dummy tear down function"""

    def make_config(self, config_dirs=None):
        """Create a coreprobe config for use with tests. By default uses
        `test/data/config_dir` as the config directory."""

        cfg = config.load_empty()
        if config_dirs is None:
            config_dirs = [self.CONFIG_DIR]

        cfg.config_dirs = list(config_dirs)
        return cfg
