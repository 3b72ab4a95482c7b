"""Sets up the coreprobe command's arguments."""

import argparse

from coreprobe import __version__


def get_parser():
    """Build the argument parser for the coreprobe command."""

    parser = argparse.ArgumentParser(
        prog='coreprobe',
        description="Report the number of physical cores and logical "
                    "processors on this host.")

    parser.add_argument('--version', action='version',
                        version='coreprobe ' + __version__,
                        help='Displays the current version of coreprobe.')

    select = parser.add_mutually_exclusive_group()
    select.add_argument(
        '--cores', action='store_true', default=False,
        help="Print only the number of physical cores.")
    select.add_argument(
        '--processors', action='store_true', default=False,
        help="Print only the number of logical processors.")
    select.add_argument(
        '--list', action='store_true', default=False,
        help="List the registered probes and the platforms they handle.")

    parser.add_argument(
        '--json', action='store_true', default=False,
        help="Print the output as JSON.")
    parser.add_argument(
        '--platform', default=None,
        help="Query the probe for this platform key instead of the one "
             "for this host.")
    parser.add_argument(
        '--timeout', type=float, default=None,
        help="Seconds to wait on a probe's command. 0 waits forever. "
             "Defaults to the config's timeout.")
    parser.add_argument(
        '--config', default=None,
        help="Use this config file rather than searching for one.")
    parser.add_argument(
        '-v', '--verbose', action='store_true', default=False,
        help="Log debugging information to stderr.")

    return parser
