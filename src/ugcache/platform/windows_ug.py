# On Windows, there is no passwd / group database. Every lookup reports
# "not found" and the enumerations are empty.


def get_user_by_uid(uid):
    return None


def get_user_by_name(username):
    return None


def get_group_by_gid(gid):
    return None


def get_group_by_name(group_name):
    return None


def all_users():
    return iter(())


def all_groups():
    return iter(())


def get_user_groups(username, gid):
    return None


def get_user_gids(username, gid):
    return None
