"""
A cache for users and groups provided by the OS.

Because the user and group tables change so infrequently, it's common for
short-running programs to cache the results instead of getting the most
up-to-date entries every time. UsersCache helps with this: it has the same
lookup methods as the raw platform functions, only it stores the results.

    cache = UsersCache()
    user = cache.get_user_by_uid(502)
    same_user = cache.get_user_by_uid(502)
    assert user is same_user

Caching, identity and mutability
--------------------------------

The methods are *idempotent*: ask for uid 502 twice and you get the very
same User object both times, and the OS is asked only once. This also holds
for failed lookups: a uid or name the OS did not know is remembered as a
negative entry and never asked for again. There is no expiry, a cache sees
the identity database as it was when each entry was first looked up.

Lookups look read-only to the caller but update the cache's tables. The
records handed out are immutable tuples that are shared between the cache
and its callers, so a caller can keep them as long as it likes, also after
the cache is gone; further lookups never change a record a caller already
holds.

A UsersCache is not thread-safe. Lookups from several threads at the same
time need external locking (one lock around every call is enough), or just
one cache per thread. The records themselves can be passed between threads
freely.

UsersSnapshot is the eager alternative: it reads all users at construction
time and never talks to the OS again.
"""

from .helpers.errors import IndexInconsistency
from .interfaces import Users, Groups, AllUsers
from .logger import create_logger
from .records import fsname

logger = create_logger()


class IdNameMap:
    """
    A kinda-bidirectional mapping that associates ids to values, and then
    names back to ids.

    It doesn't offer values-to-ids lookup: the id is part of every value
    anyway.

    Both tables distinguish three states for a key:

    - key not present: never looked up
    - value is None: looked up, does not exist (negative entry)
    - anything else: looked up and found
    """

    __slots__ = ("forward", "backward")

    def __init__(self):
        self.forward = {}  # id -> value or None
        self.backward = {}  # name -> id or None

    def insert(self, id, name, value):
        """Create a positive entry, replacing whatever was there for *id* and *name*."""
        self.forward[id] = value
        self.backward[name] = id

    def values(self):
        """yield all positive entries"""
        return (value for value in self.forward.values() if value is not None)

    def __len__(self):
        return sum(1 for value in self.forward.values() if value is not None)

    def __repr__(self):
        return f"<{self.__class__.__name__} ids={len(self.forward)} names={len(self.backward)}>"


def _default_source():
    from . import platform

    return platform


class UsersCache(Users, Groups):
    """
    A producer of user and group instances that caches every result.

    *source* is where cache misses are looked up: any object with the raw
    lookup functions of ugcache.platform (get_user_by_uid, get_user_by_name,
    get_group_by_gid, get_group_by_name, get_current_uid, get_effective_uid,
    get_current_gid, get_effective_gid, all_users). Defaults to the platform
    module itself, i.e. the OS.

    See the module documentation for the caching and thread-safety rules.
    """

    def __init__(self, source=None):
        self.source = source if source is not None else _default_source()
        self._users = IdNameMap()
        self._groups = IdNameMap()
        self._uid = None
        self._euid = None
        self._gid = None
        self._egid = None

    @classmethod
    def with_all_users(cls, source=None):
        """
        Create a cache that already contains all the users of the system.

        Groups and process ids are still looked up lazily.

        Not safe to call concurrently with another enumeration of the users
        database on a different thread, see ugcache.platform.posix_ug.all_users.
        """
        cache = cls(source)
        count = 0
        for user in cache.source.all_users():
            cache._users.insert(user.uid, user.name, user)
            count += 1
        logger.debug("populated users cache with %d users", count)
        return cache

    def __repr__(self):
        return f"<{self.__class__.__name__} users={self._users!r} groups={self._groups!r}>"

    @staticmethod
    def _by_id(table, id, lookup, kind):
        try:
            return table.forward[id]
        except KeyError:
            pass
        record = lookup(id)
        if record is None:
            logger.debug("%s id %r not found, caching negative entry", kind, id)
            table.forward[id] = None
            return None
        table.insert(id, record.name, record)
        return record

    @staticmethod
    def _by_name(table, name, lookup, id_of, kind):
        name = fsname(name)
        try:
            id = table.backward[name]
        except KeyError:
            pass
        else:
            if id is None:
                return None
            try:
                record = table.forward[id]
            except KeyError:
                raise IndexInconsistency(kind, name, id) from None
            if record is None:
                raise IndexInconsistency(kind, name, id)
            return record
        record = lookup(name)
        if record is None:
            logger.debug("%s name %r not found, caching negative entry", kind, name)
            table.backward[name] = None
            return None
        id = id_of(record)
        cached = table.forward.get(id)
        if cached is not None and cached == record:
            # the OS knows this record under more than one name, keep handing out the first object.
            record = cached
        else:
            # a different account sharing the id (e.g. root and toor) replaces the cached one.
            table.insert(id, record.name, record)
        table.backward[name] = id
        return record

    # Users

    def get_user_by_uid(self, uid):
        return self._by_id(self._users, uid, self.source.get_user_by_uid, "user")

    def get_user_by_name(self, username):
        return self._by_name(self._users, username, self.source.get_user_by_name, lambda u: u.uid, "user")

    def get_current_uid(self):
        if self._uid is None:
            self._uid = self.source.get_current_uid()
        return self._uid

    def get_effective_uid(self):
        if self._euid is None:
            self._euid = self.source.get_effective_uid()
        return self._euid

    # Groups

    def get_group_by_gid(self, gid):
        return self._by_id(self._groups, gid, self.source.get_group_by_gid, "group")

    def get_group_by_name(self, group_name):
        return self._by_name(self._groups, group_name, self.source.get_group_by_name, lambda g: g.gid, "group")

    def get_current_gid(self):
        if self._gid is None:
            self._gid = self.source.get_current_gid()
        return self._gid

    def get_effective_gid(self):
        if self._egid is None:
            self._egid = self.source.get_effective_gid()
        return self._egid


class UsersSnapshot(AllUsers, Users):
    """
    A container of user instances.

    UsersSnapshot collects the users eagerly, when it is created, and never
    changes afterwards. It is closed-world: a user that is not in the
    snapshot does not exist as far as the snapshot is concerned, there is no
    fallback to the OS. See UsersCache for a lazy cache.

    Users are keyed by uid. If several accounts share a uid (like root and
    toor on BSD), only the last one enumerated is kept. Looking up the other
    account by name then returns the kept account.
    """

    def __init__(self, users, current_uid, effective_uid):
        self._users = IdNameMap()
        for user in users:
            self._users.insert(user.uid, user.name, user)
        self._uid = current_uid
        self._euid = effective_uid

    @classmethod
    def filtered(cls, predicate, source=None):
        """
        Create a snapshot of all system users for which predicate(user) is true.

        Not safe to call concurrently with another enumeration of the users
        database on a different thread, see ugcache.platform.posix_ug.all_users.

            # leave out Linux system users
            snapshot = UsersSnapshot.filtered(lambda u: u.uid >= 1000)
        """
        if source is None:
            source = _default_source()
        snapshot = cls(
            (user for user in source.all_users() if predicate(user)),
            source.get_current_uid(),
            source.get_effective_uid(),
        )
        logger.debug("created users snapshot with %d users", len(snapshot))
        return snapshot

    @classmethod
    def from_system(cls, source=None):
        """Create a snapshot of all system users (same caveats as filtered)."""
        return cls.filtered(lambda user: True, source)

    def __len__(self):
        return len(self._users)

    def __repr__(self):
        return f"<{self.__class__.__name__} users={len(self)}>"

    # AllUsers

    def all_users(self):
        return self._users.values()

    def user_by_uid(self, uid):
        return self._users.forward.get(uid)

    def user_by_name(self, username):
        uid = self._users.backward.get(fsname(username))
        if uid is None:
            return None
        return self.user_by_uid(uid)

    def current_uid(self):
        return self._uid

    def effective_uid(self):
        return self._euid

    # Users

    def get_user_by_uid(self, uid):
        return self.user_by_uid(uid)

    def get_user_by_name(self, username):
        return self.user_by_name(username)

    def get_current_uid(self):
        return self._uid

    def get_effective_uid(self):
        return self._euid
