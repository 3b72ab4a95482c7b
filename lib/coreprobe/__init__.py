"""Report the physical core and logical processor counts of the host."""

__version__ = '1.0.0'
