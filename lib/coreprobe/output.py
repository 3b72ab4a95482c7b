"""
This module provides helper functions for printing and general output.

The standard 3/4 bit colors are available as module attributes.

..code:: python
output.fprint("All done.", color=output.GREEN)
"""

import json
import shutil
import sys
import textwrap

BLACK = 30
RED = 31
GREEN = 32
YELLOW = 33
BLUE = 34
MAGENTA = 35
CYAN = 36
WHITE = 37
GREY = 37
BOLD = 1
FAINT = 2


def fprint(*args, color=None, bullet='', width=0, wrap_indent=0,
           sep=' ', file=sys.stdout, end='\n', flush=False):
    """Print with automatic wrapping, bullets, and other features. Also accepts
    all print() kwargs.

    :param args: Standard print function args
    :param int color: ANSI color code to print with.
    :param str bullet: Print the first line with this 'bullet' string, and the
        following lines indented to match.
    :param str sep: The standard print sep argument.
    :param file: Stream to print.
    :param int wrap_indent: Indent lines (after the first) this number of
        spaces for each paragraph.
    :param Union[int,None] width: Wrap the text to this width. If 0, find the
        terminal's width and wrap to that.
    :param str end: String appended after the last value (default \\n)
    :param bool flush: Whether to forcibly flush the stream.
"""

    args = [str(a) for a in args]
    if color is not None:
        print('\x1b[{}m'.format(color), end='', file=file)

    if width == 0:
        width = shutil.get_terminal_size().columns
        width = 80 if width == 0 else width

    wrap_indent = ' '*wrap_indent

    out_str = sep.join(args)
    if width is not None:
        paragraphs = []
        for paragraph in str.splitlines(out_str):
            lines = textwrap.wrap(paragraph, width=width,
                                  subsequent_indent=wrap_indent)
            lines = '\n'.join(lines)

            if bullet:
                lines = textwrap.indent(lines, bullet, lines.startswith)

            paragraphs.append(lines)
        print('\n'.join(paragraphs), file=file, end='')
    else:
        print(out_str, file=file, end='')

    if color is not None:
        print('\x1b[0m', file=file, end='')

    print(end, end='', file=file, flush=flush)


class ProbeEncoder(json.JSONEncoder):
    """Writes probe results as objects instead of lists. Named tuples never
    reach ``default()``, so they're converted before encoding."""

    def iterencode(self, o, _one_shot=False):
        return super().iterencode(self._convert(o), _one_shot)

    def _convert(self, obj):
        if hasattr(obj, 'as_dict'):
            return self._convert(obj.as_dict())
        elif isinstance(obj, dict):
            return {key: self._convert(val) for key, val in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._convert(val) for val in obj]
        else:
            return obj


def json_dumps(obj, indent=None, sort_keys=False, **kw):
    """Dump data to string as per the json dumps function, but using
our custom encoder."""

    return json.dumps(obj, cls=ProbeEncoder, indent=indent,
                      sort_keys=sort_keys, **kw)
