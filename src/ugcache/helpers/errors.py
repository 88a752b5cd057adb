import os

from ..constants import EXIT_ERROR, EXIT_WARNING, ENV_EXIT_CODES


modern_ec = os.environ.get(ENV_EXIT_CODES, "legacy") == "modern"


class ErrorBase(Exception):
    """ErrorBase: {}"""
    # Error base class

    # If we raise such an Error and it is only caught by the uppermost
    # exception handler (that exits shortly after with the given exit_code),
    # it is always a (fatal and abrupt) error, never just a warning.
    exit_mcode = EXIT_ERROR  # modern, more specific exit code (defaults to EXIT_ERROR)

    # show a traceback?
    traceback = False

    def __init__(self, *args):
        super().__init__(*args)
        self.args = args

    def get_message(self):
        return type(self).__doc__.format(*self.args)

    __str__ = get_message

    @property
    def exit_code(self):
        # legacy: all errors use rc 2 (EXIT_ERROR).
        # modern: users can opt in to more specific return codes, using UGCACHE_EXIT_CODES:
        return self.exit_mcode if modern_ec else EXIT_ERROR


class Error(ErrorBase):
    """Error: {}"""


class ErrorWithTraceback(Error):
    """Error: {}"""
    # like Error, but show a traceback also
    traceback = True


class IndexInconsistency(ErrorWithTraceback):
    """Identity index is inconsistent: {} {!r} maps to id {}, which has no cached record."""
    # The name table points to an id the id table has never seen. Only possible
    # if the tables were modified behind the cache's back.
    exit_mcode = 90


class CommandError(Error):
    """Command Error: {}"""
    exit_mcode = 4


class NotFoundWarning:
    """{} {!r} not found"""
    # please note that this class is NOT an exception, we do not raise it.
    # a lookup miss is an ordinary result, this just gives the command line a message and an exit code.
    exit_mcode = EXIT_WARNING

    def __init__(self, *args):
        self.args = args

    def get_message(self):
        return type(self).__doc__.format(*self.args)

    __str__ = get_message

    @property
    def exit_code(self):
        return self.exit_mcode
