"""
ugcache - memoizing user and group lookups
==========================================

The OS user and group tables change so rarely that short-running programs
can safely look every identity up once and keep the result. This package
provides:

* :class:`~ugcache.cache.UsersCache`: a lazy cache that asks the OS on the
  first lookup of an id or name and remembers the answer (including "no such
  user") for its whole lifetime.
* :class:`~ugcache.cache.UsersSnapshot`: an eagerly built, read-only set of
  users taken from a full enumeration.
* :class:`~ugcache.mock.MockUsers`: an in-memory stand-in for tests.

All of them implement the contracts in :mod:`ugcache.interfaces`; code should
depend on those instead of a concrete class.
"""

import logging

from packaging.version import parse as parse_version

from ._version import version as __version__


_v = parse_version(__version__)
__version_tuple__ = _v.release

# assert that all semver components are integers
# this is mainly to show errors when people repackage poorly
assert all(isinstance(v, int) for v in __version_tuple__), (
    """\
Broken ugcache version metadata: %r
"""
    % __version__
)

# library code must stay silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .records import User, Group  # noqa: E402
from .interfaces import Users, Groups, AllUsers  # noqa: E402
from .cache import UsersCache, UsersSnapshot  # noqa: E402
from .mock import MockUsers  # noqa: E402

__all__ = [
    "User",
    "Group",
    "Users",
    "Groups",
    "AllUsers",
    "UsersCache",
    "UsersSnapshot",
    "MockUsers",
    "__version__",
    "__version_tuple__",
]
