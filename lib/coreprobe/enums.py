"""This file contains common 'enum' constants."""

import enum


class QueryMode(enum.Enum):
    """What a cpu query should return."""

    # The full ProbeResult.
    BOTH = 'both'

    # Just the physical core count.
    CORES = 'cores'

    # Just the logical processor count.
    PROCESSORS = 'processors'
