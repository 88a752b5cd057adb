from collections import Counter

from ..mock import MockUsers
from ..records import User, Group


class CountingUsers(MockUsers):
    """MockUsers used as a raw source, counting how often each lookup was made."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = Counter()

    def get_user_by_uid(self, uid):
        self.calls["get_user_by_uid", uid] += 1
        return super().get_user_by_uid(uid)

    def get_user_by_name(self, username):
        self.calls["get_user_by_name", username] += 1
        return super().get_user_by_name(username)

    def get_group_by_gid(self, gid):
        self.calls["get_group_by_gid", gid] += 1
        return super().get_group_by_gid(gid)

    def get_group_by_name(self, group_name):
        self.calls["get_group_by_name", group_name] += 1
        return super().get_group_by_name(group_name)

    def get_current_uid(self):
        self.calls["get_current_uid"] += 1
        return super().get_current_uid()

    def get_effective_uid(self):
        self.calls["get_effective_uid"] += 1
        return super().get_effective_uid()

    def get_current_gid(self):
        self.calls["get_current_gid"] += 1
        return super().get_current_gid()

    def get_effective_gid(self):
        self.calls["get_effective_gid"] += 1
        return super().get_effective_gid()

    def all_users(self):
        self.calls["all_users"] += 1
        return super().all_users()

    def lookups(self):
        """number of per-id / per-name lookups made so far"""
        return sum(count for key, count in self.calls.items() if isinstance(key, tuple))


def make_source(uid=501, gid=20):
    source = CountingUsers(uid, gid)
    source.add_user(User("alice", 501, 20, "Alice", "/home/alice", "/bin/zsh"))
    source.add_user(User("bob", 502, 20, "Bob", "/home/bob", "/bin/bash"))
    source.add_user(User("daemon", 1, 1, "", "/", "/usr/sbin/nologin"))
    source.add_group(Group("staff", 20, ["alice", "bob"]))
    source.add_group(Group("daemon", 1))
    return source
