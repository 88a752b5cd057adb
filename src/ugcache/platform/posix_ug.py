import grp
import os
import pwd

from ..logger import create_logger
from ..records import User, Group, fsname

logger = create_logger()

# errors the pwd / grp modules raise for "no such entry" and for ids / names
# the C library can't even represent. all of them mean "not found" to us.
LOOKUP_ERRORS = (KeyError, OverflowError, TypeError, ValueError, OSError)


def get_user_by_uid(uid):
    try:
        return User.from_pwd(pwd.getpwuid(uid))
    except LOOKUP_ERRORS as err:
        logger.debug("getpwuid(%r) failed: %r", uid, err)
        return None


def get_user_by_name(username):
    if not username:
        # username is either None or the empty string
        return None
    username = fsname(username)
    try:
        return User.from_pwd(pwd.getpwnam(username))
    except LOOKUP_ERRORS as err:
        logger.debug("getpwnam(%r) failed: %r", username, err)
        return None


def get_group_by_gid(gid):
    try:
        return Group.from_grp(grp.getgrgid(gid))
    except LOOKUP_ERRORS as err:
        logger.debug("getgrgid(%r) failed: %r", gid, err)
        return None


def get_group_by_name(group_name):
    if not group_name:
        # group_name is either None or the empty string
        return None
    group_name = fsname(group_name)
    try:
        return Group.from_grp(grp.getgrnam(group_name))
    except LOOKUP_ERRORS as err:
        logger.debug("getgrnam(%r) failed: %r", group_name, err)
        return None


def all_users():
    """
    Yield every user in the passwd database.

    The whole database is read (getpwall) before the first record is
    yielded. getpwall walks process-global libc state (setpwent / getpwent),
    so two enumerations running on different threads at the same time may
    interfere with each other.
    """
    for pw in pwd.getpwall():
        yield User.from_pwd(pw)


def all_groups():
    """Yield every group in the group database (same caveats as all_users)."""
    for gr in grp.getgrall():
        yield Group.from_grp(gr)


def get_user_gids(username, gid):
    """
    Return the ids of the groups *username* is a member of, including *gid* (usually the user's primary group).

    Returns None if the list can't be determined. Every gid occurs once, in
    the order the OS reports them.
    """
    username = fsname(username)
    try:
        gids = os.getgrouplist(username, gid)
    except LOOKUP_ERRORS as err:
        logger.debug("getgrouplist(%r, %r) failed: %r", username, gid, err)
        return None
    return list(dict.fromkeys(gids))


def get_user_groups(username, gid):
    """Like get_user_gids, resolved to Group records. Group ids without a group database entry are left out."""
    gids = get_user_gids(username, gid)
    if gids is None:
        return None
    groups = []
    for member_gid in gids:
        group = get_group_by_gid(member_gid)
        if group is not None:
            groups.append(group)
    return groups
