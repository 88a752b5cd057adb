"""
user and group records

Records are tuples: once built they can't be changed, so one record object
can be shared between a cache's index and any number of callers.
"""

import os
from collections import namedtuple


def fsname(name):
    """return *name* as str, decoding bytes the way the OS encoded them"""
    return os.fsdecode(name)


class User(namedtuple("User", "name uid primary_group_id gecos home_dir shell")):
    """Information about one user account, as found in the passwd database."""

    __slots__ = ()

    def __new__(cls, name, uid, primary_group_id, gecos="", home_dir="", shell=""):
        return super().__new__(cls, fsname(name), int(uid), int(primary_group_id), gecos, home_dir, shell)

    @classmethod
    def from_pwd(cls, pw):
        """build a User from a pwd.struct_passwd"""
        return cls(pw.pw_name, pw.pw_uid, pw.pw_gid, pw.pw_gecos, pw.pw_dir, pw.pw_shell)

    def __repr__(self):
        return f"<User {self.name!r} uid={self.uid} gid={self.primary_group_id}>"

    def as_dict(self):
        return dict(self._asdict())


class Group(namedtuple("Group", "name gid members")):
    """Information about one group, as found in the group database."""

    __slots__ = ()

    def __new__(cls, name, gid, members=()):
        return super().__new__(cls, fsname(name), int(gid), tuple(fsname(m) for m in members))

    @classmethod
    def from_grp(cls, gr):
        """build a Group from a grp.struct_group"""
        return cls(gr.gr_name, gr.gr_gid, gr.gr_mem)

    def __repr__(self):
        return f"<Group {self.name!r} gid={self.gid} members={len(self.members)}>"

    def as_dict(self):
        d = dict(self._asdict())
        d["members"] = list(self.members)
        return d
