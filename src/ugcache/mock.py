"""
Mockable users and groups.

When testing code that deals with users and groups, the users and groups of
the machine running the tests are out of the test's control. MockUsers is
an in-memory table of users and groups that implements the same contracts
as UsersCache, so code written against ugcache.interfaces.Users / Groups can
be given a MockUsers in tests:

    from ugcache import MockUsers, User

    users = MockUsers(uid=1000)
    users.add_user(User("alice", 1000, 100))
    assert users.get_current_username() == "alice"

MockUsers also provides the raw source functions (all_users, ...), so it can
be used as the *source* of a UsersCache or UsersSnapshot.
"""

from .interfaces import Users, Groups
from .records import fsname


class MockUsers(Users, Groups):
    """A table of users and groups that only exists in memory."""

    def __init__(self, uid, gid=None, euid=None, egid=None):
        self.uid = uid
        self.euid = uid if euid is None else euid
        self.gid = uid if gid is None else gid
        self.egid = self.gid if egid is None else egid
        self.users = {}  # uid -> User
        self.groups = {}  # gid -> Group

    def add_user(self, user):
        """Add *user*, return the user previously stored under its uid (or None)."""
        previous = self.users.get(user.uid)
        self.users[user.uid] = user
        return previous

    def add_group(self, group):
        """Add *group*, return the group previously stored under its gid (or None)."""
        previous = self.groups.get(group.gid)
        self.groups[group.gid] = group
        return previous

    def with_current_gid(self, gid):
        self.gid = gid
        return self

    def with_effective_uid(self, euid):
        self.euid = euid
        return self

    def with_effective_gid(self, egid):
        self.egid = egid
        return self

    def get_user_by_uid(self, uid):
        return self.users.get(uid)

    def get_user_by_name(self, username):
        username = fsname(username)
        for user in self.users.values():
            if user.name == username:
                return user
        return None

    def get_current_uid(self):
        return self.uid

    def get_effective_uid(self):
        return self.euid

    def get_group_by_gid(self, gid):
        return self.groups.get(gid)

    def get_group_by_name(self, group_name):
        group_name = fsname(group_name)
        for group in self.groups.values():
            if group.name == group_name:
                return group
        return None

    def get_current_gid(self):
        return self.gid

    def get_effective_gid(self):
        return self.egid

    def all_users(self):
        return iter(list(self.users.values()))

    def all_groups(self):
        return iter(list(self.groups.values()))

    def get_user_groups(self, username, gid):
        username = fsname(username)
        if self.get_user_by_name(username) is None:
            return None
        return [group for group in self.groups.values() if group.gid == gid or username in group.members]

    def get_user_gids(self, username, gid):
        groups = self.get_user_groups(username, gid)
        if groups is None:
            return None
        return [gid] + [group.gid for group in groups if group.gid != gid]
