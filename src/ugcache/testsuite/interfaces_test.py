import pytest

from ..cache import UsersCache, UsersSnapshot
from ..interfaces import Users, Groups, AllUsers
from ..mock import MockUsers
from . import make_source


def home_of(users, username):
    """example of code written against the contract"""
    user = users.get_user_by_name(username)
    return user.home_dir if user is not None else None


@pytest.mark.parametrize("cls", [Users, Groups, AllUsers])
def test_contracts_are_abstract(cls):
    with pytest.raises(TypeError):
        cls()


def test_implementations():
    source = make_source()
    cache = UsersCache(source)
    snapshot = UsersSnapshot.from_system(source)
    assert isinstance(cache, Users) and isinstance(cache, Groups)
    assert not isinstance(cache, AllUsers)
    assert isinstance(snapshot, Users) and isinstance(snapshot, AllUsers)
    assert not isinstance(snapshot, Groups)
    assert isinstance(source, Users) and isinstance(source, Groups)


def test_interchangeable():
    source = make_source()
    for users in source, UsersCache(source), UsersSnapshot.from_system(source):
        assert home_of(users, "bob") == "/home/bob"
        assert home_of(users, "nobody") is None
        assert users.get_current_username() == "alice"


def test_partial_implementation_gets_name_helpers():
    class OnlyRoot(Users):
        def get_user_by_uid(self, uid):
            return MockUsers(0).get_user_by_uid(uid)

        def get_user_by_name(self, username):
            return None

        def get_current_uid(self):
            return 0

        def get_effective_uid(self):
            return 0

    users = OnlyRoot()
    assert users.get_current_username() is None
    assert users.get_effective_username() is None
