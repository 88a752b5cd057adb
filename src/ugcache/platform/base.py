import os

"""
platform base module
====================

Contains platform API implementations based on what Python itself provides.

Process identity: the real / effective ids of the running process. Where the
OS has no such notion (Windows), 0 is used as the canonical placeholder.
"""


def get_current_uid():
    getuid = getattr(os, "getuid", None)
    return getuid() if getuid is not None else 0


def get_effective_uid():
    geteuid = getattr(os, "geteuid", None)
    return geteuid() if geteuid is not None else 0


def get_current_gid():
    getgid = getattr(os, "getgid", None)
    return getgid() if getgid is not None else 0


def get_effective_gid():
    getegid = getattr(os, "getegid", None)
    return getegid() if getegid is not None else 0
