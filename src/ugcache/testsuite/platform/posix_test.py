import os

import pytest

from ...cache import UsersCache, UsersSnapshot
from ...records import User, Group
from ...platformflags import has_identity_db
from .platform_test import skipif_not_posix

# set module-level skips
pytestmark = skipif_not_posix

if has_identity_db:
    import grp
    import pwd

    from ...platform import posix_ug


def some_user():
    return pwd.getpwall()[0]


def some_group():
    return grp.getgrall()[0]


def test_user_by_uid():
    pw = some_user()
    user = posix_ug.get_user_by_uid(pw.pw_uid)
    assert isinstance(user, User)
    assert user.uid == pw.pw_uid
    assert user.home_dir == pw.pw_dir


def test_user_by_name():
    pw = some_user()
    user = posix_ug.get_user_by_name(pw.pw_name)
    assert user.name == pw.pw_name
    assert posix_ug.get_user_by_name(os.fsencode(pw.pw_name)).uid == user.uid


def unused_uid():
    uid = max(pw.pw_uid for pw in pwd.getpwall()) + 1
    if uid >= 2**32 - 1:
        pytest.skip("no unused uid found")
    return uid


def test_user_by_uid_not_found():
    assert posix_ug.get_user_by_uid(unused_uid()) is None


@pytest.mark.parametrize("uid", [-5, 2**80])
def test_user_by_uid_unrepresentable(uid):
    # uids the C library can not even represent just are not found
    assert posix_ug.get_user_by_uid(uid) is None


@pytest.mark.parametrize("name", ["", None, "no-such-user-hopefully", "nul\0byte"])
def test_user_by_name_not_found(name):
    assert posix_ug.get_user_by_name(name) is None


def test_group_by_gid_and_name():
    gr = some_group()
    group = posix_ug.get_group_by_gid(gr.gr_gid)
    assert isinstance(group, Group)
    assert group.name == gr.gr_name
    assert group.members == tuple(gr.gr_mem)
    assert posix_ug.get_group_by_name(gr.gr_name).gid == gr.gr_gid


@pytest.mark.parametrize("name", ["", None, "no-such-group-hopefully"])
def test_group_by_name_not_found(name):
    assert posix_ug.get_group_by_name(name) is None


def test_group_by_gid_not_found():
    assert posix_ug.get_group_by_gid(-5) is None
    assert posix_ug.get_group_by_gid(2**80) is None


def test_all_users_and_groups():
    assert {u.uid for u in posix_ug.all_users()} == {pw.pw_uid for pw in pwd.getpwall()}
    assert {g.gid for g in posix_ug.all_groups()} == {gr.gr_gid for gr in grp.getgrall()}


def test_user_groups():
    pw = some_user()
    groups = posix_ug.get_user_groups(pw.pw_name, pw.pw_gid)
    assert groups is not None
    gids = [g.gid for g in groups]
    assert len(gids) == len(set(gids))
    if posix_ug.get_group_by_gid(pw.pw_gid) is not None:
        assert pw.pw_gid in gids


def test_user_gids():
    pw = some_user()
    gids = posix_ug.get_user_gids(pw.pw_name, pw.pw_gid)
    assert gids is not None
    assert pw.pw_gid in gids
    assert len(gids) == len(set(gids))


def test_cache_against_os():
    pw = some_user()
    cache = UsersCache()
    user = cache.get_user_by_uid(pw.pw_uid)
    assert cache.get_user_by_name(pw.pw_name) is user
    assert cache.get_user_by_uid(pw.pw_uid) is user
    assert cache.get_current_uid() == os.getuid()
    current = cache.get_current_username()
    try:
        assert current == pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        # running as a uid without passwd entry (e.g. some containers)
        assert current is None


def test_snapshot_against_os():
    snapshot = UsersSnapshot.from_system()
    assert {u.uid for u in snapshot.all_users()} == {pw.pw_uid for pw in pwd.getpwall()}
    assert snapshot.current_uid() == os.getuid()
    assert snapshot.effective_uid() == os.geteuid()


def test_cache_with_all_users_against_os():
    cache = UsersCache.with_all_users()
    for pw in pwd.getpwall():
        assert cache.get_user_by_uid(pw.pw_uid).uid == pw.pw_uid
