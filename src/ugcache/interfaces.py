"""
Contracts for producers and containers of users and groups.

UsersCache, UsersSnapshot and MockUsers all implement (some of) these, so
code that only needs "something that can look up users" should accept a
Users, not one of the concrete classes. That way production code and test
doubles are interchangeable.
"""

from abc import ABC, abstractmethod


class Users(ABC):
    """
    Producer of users.

    Returned records are shared: looking up the same user twice may return
    the very same object. Records are immutable, so that is safe.
    """

    @abstractmethod
    def get_user_by_uid(self, uid):
        """Return the User with the given uid, or None if there is none."""

    @abstractmethod
    def get_user_by_name(self, username):
        """Return the User with the given name (str or bytes), or None if there is none."""

    @abstractmethod
    def get_current_uid(self):
        """Return the real uid of the running process."""

    @abstractmethod
    def get_effective_uid(self):
        """Return the effective uid of the running process."""

    def get_current_username(self):
        """Return the name of the user running the process, or None if it has no passwd entry."""
        user = self.get_user_by_uid(self.get_current_uid())
        return user.name if user is not None else None

    def get_effective_username(self):
        """Return the name of the effective user, or None if it has no passwd entry."""
        user = self.get_user_by_uid(self.get_effective_uid())
        return user.name if user is not None else None


class Groups(ABC):
    """
    Producer of groups.

    Same shape as Users, for groups.
    """

    @abstractmethod
    def get_group_by_gid(self, gid):
        """Return the Group with the given gid, or None if there is none."""

    @abstractmethod
    def get_group_by_name(self, group_name):
        """Return the Group with the given name (str or bytes), or None if there is none."""

    @abstractmethod
    def get_current_gid(self):
        """Return the real gid of the running process."""

    @abstractmethod
    def get_effective_gid(self):
        """Return the effective gid of the running process."""

    def get_current_groupname(self):
        group = self.get_group_by_gid(self.get_current_gid())
        return group.name if group is not None else None

    def get_effective_groupname(self):
        group = self.get_group_by_gid(self.get_effective_gid())
        return group.name if group is not None else None


class AllUsers(ABC):
    """
    Container of users.

    Unlike a Users producer, a container knows its complete contents up
    front: all_users() can be iterated as often as needed and always yields
    the same, finite set of records.
    """

    @abstractmethod
    def all_users(self):
        """Return a new iterator over every User in the container."""

    @abstractmethod
    def user_by_uid(self, uid):
        """Return the User with the given uid, or None."""

    @abstractmethod
    def user_by_name(self, username):
        """Return the User with the given name, or None."""

    @abstractmethod
    def current_uid(self):
        """Return the real uid of the process, as captured by the container."""

    @abstractmethod
    def effective_uid(self):
        """Return the effective uid of the process, as captured by the container."""

    def current_username(self):
        user = self.user_by_uid(self.current_uid())
        return user.name if user is not None else None

    def effective_username(self):
        user = self.user_by_uid(self.effective_uid())
        return user.name if user is not None else None
