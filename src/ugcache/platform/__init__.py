"""
Platform-specific APIs.

This module is the raw identity source used by ugcache.cache: one OS call per
lookup, no caching. Any object providing the same functions can be used as a
source instead (see ugcache.mock.MockUsers).

Lookups return a User / Group record, or None if the OS has no such entry or
the OS call failed for any other reason.
"""

from ..platformflags import has_identity_db

from .base import get_current_uid, get_effective_uid, get_current_gid, get_effective_gid

if has_identity_db:
    from .posix_ug import get_user_by_uid, get_user_by_name, get_group_by_gid, get_group_by_name
    from .posix_ug import all_users, all_groups, get_user_gids, get_user_groups
else:  # pragma: win32 only
    from .windows_ug import get_user_by_uid, get_user_by_name, get_group_by_gid, get_group_by_name
    from .windows_ug import all_users, all_groups, get_user_gids, get_user_groups
