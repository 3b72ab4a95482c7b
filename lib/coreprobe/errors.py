"""This module holds the coreprobe exception classes, mainly to prevent cyclic
import problems."""

import pprint
import shutil
import textwrap
import traceback


class CoreProbeError(RuntimeError):
    """Base class for all coreprobe errors."""

    TAB_LEVEL = '  '

    def __init__(self, msg, prior_error=None, data=None):
        """These take a new message and whatever prior error caused the problem.

        :param msg: The error message.
        :param prior_error: The exception object that triggered this exception.
        :param data: Any relevant data that needs to be passed to the user.
        """

        self._msg = msg
        self.prior_error = prior_error
        self.data = data
        super().__init__(msg)

    @property
    def msg(self):
        """Just return msg. This exists to be overridden in order to allow for
        dynamically generated messages."""

        return self._msg

    def __reduce__(self):
        return type(self), (self.msg, self.prior_error, self.data)

    def __str__(self):
        if self.prior_error:
            return '{}: {}'.format(self.msg, str(self.prior_error))
        else:
            return self.msg

    def pformat(self, show_traceback: bool = False) -> str:
        """Format the error and the chain of errors that caused it, each
        cause indented one level deeper than the last."""

        if show_traceback:
            return ''.join(traceback.format_exception(
                type(self), self, self.__traceback__))

        width = shutil.get_terminal_size((80, 80)).columns
        lines = []

        err = self
        depth = 0
        while err is not None:
            indent = self.TAB_LEVEL * depth
            if isinstance(err, CoreProbeError):
                msg, data, cause = err.msg, err.data, err.prior_error
            else:
                msg, data, cause = str(err), None, None

            for part in str(msg).split('\n'):
                lines.extend(textwrap.wrap(part, width, initial_indent=indent,
                                           subsequent_indent=indent))
            if data:
                data = pprint.pformat(data, width=width - len(indent))
                lines.extend(indent + line for line in data.split('\n'))

            err = cause
            depth += 1

        return '\n'.join(lines)

    def __eq__(self, other):
        """Errors are equal when they have the same type and attributes. Prior
        errors only need to match in type and message."""

        if type(other) is not type(self):
            return False

        for key, value in self.__dict__.items():
            other_value = other.__dict__.get(key)
            if isinstance(value, BaseException):
                if (type(value) is not type(other_value)
                        or str(value) != str(other_value)):
                    return False
            elif value != other_value:
                return False

        return True

    __hash__ = RuntimeError.__hash__


class ArgumentConflict(CoreProbeError):
    """Raised when mutually exclusive query selectors are requested together."""

    def __init__(self, operation, selectors=('cores_only', 'processors_only'),
                 prior_error=None, data=None):

        self.operation = operation
        self.selectors = tuple(selectors)

        super().__init__(
            "Invalid arguments to {}: the selectors {} are mutually exclusive "
            "but were requested together."
            .format(operation, ' and '.join(repr(sel) for sel in self.selectors)),
            prior_error=prior_error, data=data)

    def __reduce__(self):
        return type(self), (self.operation, self.selectors, self.prior_error, self.data)


class DelegateUnavailable(CoreProbeError):
    """Raised when no probe is registered for the current platform."""

    def __init__(self, platform, prior_error=None, data=None):

        self.platform = platform

        super().__init__(
            "No cpu probe is registered for platform '{}'.".format(platform),
            prior_error=prior_error, data=data)

    def __reduce__(self):
        return type(self), (self.platform, self.prior_error, self.data)


class DelegateFailure(CoreProbeError):
    """Raised when a probe ran but didn't produce a usable result."""

    def __init__(self, probe_name, result=None, prior_error=None, data=None):

        self.probe_name = probe_name
        self.result = result

        if prior_error is not None:
            msg = "Cpu probe '{}' failed to run.".format(probe_name)
        else:
            msg = ("Cpu probe '{}' returned an invalid result: {!r}"
                   .format(probe_name, result))

        super().__init__(msg, prior_error=prior_error, data=data)

    def __reduce__(self):
        return type(self), (self.probe_name, self.result, self.prior_error, self.data)


class DelegateTimeout(CoreProbeError):
    """Raised when a probe's underlying command doesn't finish in time."""

    def __init__(self, probe_name, timeout, prior_error=None, data=None):

        self.probe_name = probe_name
        self.timeout = timeout

        super().__init__(
            "Cpu probe '{}' did not complete within {} seconds."
            .format(probe_name, timeout),
            prior_error=prior_error, data=data)

    def __reduce__(self):
        return type(self), (self.probe_name, self.timeout, self.prior_error, self.data)


class PluginError(CoreProbeError):
    """General Plugin Error"""


class ConfigError(CoreProbeError):
    """An exception specific to errors in configuration."""
