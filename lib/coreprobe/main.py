"""This is the coreprobe command line entry point."""

import logging
import sys

from coreprobe import arguments
from coreprobe import config
from coreprobe import log_setup
from coreprobe import output
from coreprobe import platforms
from coreprobe import plugins
from coreprobe import query
from coreprobe import registry
from coreprobe.enums import QueryMode
from coreprobe.errors import CoreProbeError

LOGGER = logging.getLogger(__name__)


def main(argv=None):
    """Setup coreprobe and run the query given on the command line."""

    parser = arguments.get_parser()
    args = parser.parse_args(argv)

    try:
        cfg = config.find_config(target=args.config)
    except CoreProbeError as err:
        output.fprint("Error getting config, exiting.", color=output.RED,
                      file=sys.stderr)
        output.fprint(err.pformat(), color=output.RED, file=sys.stderr)
        sys.exit(1)

    log_setup.setup_loggers(cfg, verbose=args.verbose)

    sys.exit(run(cfg, args))


def run(cfg, args, outfile=None, errfile=None) -> int:
    """Initialize plugins and perform the requested query or listing.

    :param outfile: Where to print results. Defaults to stdout.
    :param errfile: Where to print errors. Defaults to stderr.
    :returns: The exit status for the command.
    """

    outfile = sys.stdout if outfile is None else outfile
    errfile = sys.stderr if errfile is None else errfile

    try:
        plugins.initialize_plugins(cfg)
    except CoreProbeError as err:
        output.fprint("Error initializing plugins.", color=output.RED,
                      file=errfile)
        output.fprint(err.pformat(), color=output.RED, file=errfile)
        return 1

    platform = args.platform or cfg.platform

    if args.list:
        list_probes(platforms.get_platform_key(platform), args.json, outfile)
        return 0

    if args.cores:
        mode = QueryMode.CORES
    elif args.processors:
        mode = QueryMode.PROCESSORS
    else:
        mode = QueryMode.BOTH

    timeout = cfg.timeout_secs if args.timeout is None else (args.timeout or None)

    try:
        result = query.query(mode, platform=platform, timeout=timeout)
    except CoreProbeError as err:
        LOGGER.debug("Query failed.", exc_info=True)
        output.fprint(err.pformat(), color=output.RED, file=errfile)
        return 1

    if mode is QueryMode.BOTH:
        if args.json:
            output.fprint(output.json_dumps(result), file=outfile,
                          width=None)
        else:
            output.fprint('cores: {}'.format(result.cores), file=outfile)
            output.fprint('processors: {}'.format(result.processors),
                          file=outfile)
    elif args.json:
        output.fprint(output.json_dumps({mode.value: result}), file=outfile,
                      width=None)
    else:
        output.fprint(result, file=outfile)

    return 0


def list_probes(host_key, as_json, outfile):
    """Print the registered probes, marking the one for the given host key."""

    rows = []
    for key, (probe, priority) in sorted(registry.list_probes().items()):
        rows.append({
            'platform': key,
            'probe': probe.name,
            'priority': priority,
            'path': probe.path,
            'current': key == host_key,
        })

    if as_json:
        output.fprint(output.json_dumps(rows), file=outfile, width=None)
        return

    for row in rows:
        output.fprint(
            ('* ' if row['current'] else '  ')
            + '{platform}: {probe} (priority {priority}) {path}'.format(**row),
            color=output.GREEN if row['current'] else None,
            file=outfile, width=None)
