"""
ugcache command line front end

Looks users and groups up through one UsersCache per invocation, so the same
uid / name given several times on the command line hits the OS only once.
"""

import json
import logging
import sys
import traceback
from typing import Optional

from . import __version__
from .cache import UsersCache, UsersSnapshot
from .constants import EXIT_SUCCESS, EXIT_ERROR
from .helpers.argparsing import ArgumentParser, ArgumentTypeError, flatten_namespace
from .helpers.errors import Error, CommandError, NotFoundWarning, modern_ec
from .logger import create_logger, setup_logging, flush_logging

logger = create_logger()


def is_numeric_id(value):
    # only ASCII digits, int() rejects other Unicode digits like "²"
    return value.isascii() and value.isdigit()


def format_user(user):
    return f"{user.name}:{user.uid}:{user.primary_group_id}:{user.gecos}:{user.home_dir}:{user.shell}"


def format_group(group):
    return f"{group.name}:{group.gid}:{','.join(group.members)}"


class Lookup:
    def __init__(self, prog=None, cache=None, stdout=None):
        self.prog = prog
        self.cache = cache
        self.stdout = stdout
        self.exit_code = EXIT_SUCCESS
        self.json = False

    @property
    def out(self):
        return self.stdout if self.stdout is not None else sys.stdout

    def print_record(self, record, formatter):
        if self.json:
            print(json.dumps(record.as_dict()), file=self.out)
        else:
            print(formatter(record), file=self.out)

    def print_warning(self, warning):
        logger.warning(warning.get_message(), msgid=type(warning).__qualname__)
        self.exit_code = max(self.exit_code, warning.exit_code)

    def do_user(self, args):
        """look up users by uid or name"""
        for ident in args.idents:
            if is_numeric_id(ident):
                user = self.cache.get_user_by_uid(int(ident))
            else:
                user = self.cache.get_user_by_name(ident)
            if user is None:
                self.print_warning(NotFoundWarning("user", ident))
            else:
                self.print_record(user, format_user)

    def do_group(self, args):
        """look up groups by gid or name"""
        for ident in args.idents:
            if is_numeric_id(ident):
                group = self.cache.get_group_by_gid(int(ident))
            else:
                group = self.cache.get_group_by_name(ident)
            if group is None:
                self.print_warning(NotFoundWarning("group", ident))
            else:
                self.print_record(group, format_group)

    def do_whoami(self, args):
        """show the current and effective user and group"""
        cache = self.cache
        info = dict(
            uid=cache.get_current_uid(),
            user=cache.get_current_username(),
            euid=cache.get_effective_uid(),
            euser=cache.get_effective_username(),
            gid=cache.get_current_gid(),
            group=cache.get_current_groupname(),
            egid=cache.get_effective_gid(),
            egroup=cache.get_effective_groupname(),
        )
        if self.json:
            print(json.dumps(info), file=self.out)
        else:
            print(" ".join(f"{key}={value if value is not None else '?'}" for key, value in info.items()), file=self.out)
        if info["user"] is None:
            self.print_warning(NotFoundWarning("user", info["uid"]))

    def do_groups(self, args):
        """show the groups a user is a member of"""
        if is_numeric_id(args.ident):
            user = self.cache.get_user_by_uid(int(args.ident))
        else:
            user = self.cache.get_user_by_name(args.ident)
        if user is None:
            self.print_warning(NotFoundWarning("user", args.ident))
            return
        gids = self.cache.source.get_user_gids(user.name, user.primary_group_id)
        if gids is None:
            raise Error(f"could not determine the groups of user {user.name!r}")
        for gid in gids:
            # gids without a group database entry are left out
            group = self.cache.get_group_by_gid(gid)
            if group is not None:
                self.print_record(group, format_group)

    def do_list_users(self, args):
        """list all users of the system"""
        min_uid, max_uid = args.min_uid, args.max_uid
        if max_uid is not None and max_uid < min_uid:
            raise CommandError(f"--max-uid {max_uid} is smaller than --min-uid {min_uid}")
        snapshot = UsersSnapshot.filtered(
            lambda u: u.uid >= min_uid and (max_uid is None or u.uid <= max_uid), source=self.cache.source
        )
        for user in sorted(snapshot.all_users(), key=lambda u: u.uid):
            self.print_record(user, format_user)

    def build_parser(self):
        parser = ArgumentParser(prog=self.prog, description="ugcache - cached user and group lookups")
        parser.add_argument(
            "-V", "--version", action="version", version="%(prog)s " + __version__, help="show version number and exit"
        )
        common_group = parser.add_argument_group("Common options")
        common_group.add_argument(
            "--critical",
            dest="log_level",
            action="store_const",
            const="critical",
            default="warning",
            help="work on log level CRITICAL",
        )
        common_group.add_argument(
            "--error", dest="log_level", action="store_const", const="error", help="work on log level ERROR"
        )
        common_group.add_argument(
            "--warning", dest="log_level", action="store_const", const="warning", help="work on log level WARNING"
        )
        common_group.add_argument(
            "--info", "-v", dest="log_level", action="store_const", const="info", help="work on log level INFO"
        )
        common_group.add_argument(
            "--debug", dest="log_level", action="store_const", const="debug", help="enable debug output"
        )
        common_group.add_argument(
            "--log-json", dest="log_json", action="store_true", help="Output one JSON object per log line."
        )
        common_group.add_argument(
            "--json", dest="json", action="store_true", help="Output one JSON object per record."
        )
        subparsers = parser.add_subcommands(required=True, title="required arguments", metavar="<command>")

        subparser = ArgumentParser(description=self.do_user.__doc__)
        subparser.add_argument("idents", metavar="USER", nargs="+", help="uid or user name")
        subparsers.add_subcommand("user", subparser, help=self.do_user.__doc__)

        subparser = ArgumentParser(description=self.do_group.__doc__)
        subparser.add_argument("idents", metavar="GROUP", nargs="+", help="gid or group name")
        subparsers.add_subcommand("group", subparser, help=self.do_group.__doc__)

        subparser = ArgumentParser(description=self.do_whoami.__doc__)
        subparsers.add_subcommand("whoami", subparser, help=self.do_whoami.__doc__)

        subparser = ArgumentParser(description=self.do_groups.__doc__)
        subparser.add_argument("ident", metavar="USER", help="uid or user name")
        subparsers.add_subcommand("groups", subparser, help=self.do_groups.__doc__)

        subparser = ArgumentParser(description=self.do_list_users.__doc__)
        subparser.add_argument(
            "--min-uid", metavar="UID", dest="min_uid", type=int, default=0, help="only list users with uid >= UID"
        )
        subparser.add_argument(
            "--max-uid",
            metavar="UID",
            dest="max_uid",
            type=Optional[int],
            default=None,
            help="only list users with uid <= UID",
        )
        subparsers.add_subcommand("list-users", subparser, help=self.do_list_users.__doc__)
        return parser

    def get_func(self, args):
        commands = {
            "user": self.do_user,
            "group": self.do_group,
            "whoami": self.do_whoami,
            "groups": self.do_groups,
            "list-users": self.do_list_users,
        }
        return commands.get(getattr(args, "subcommand", None))

    def parse_args(self, args=None):
        parser = self.build_parser()
        args = flatten_namespace(parser.parse_args(args or ["-h"]))
        args.func = self.get_func(args)
        if args.func is None:
            parser.error("no command given")
        return args

    def run(self, args):
        setup_logging(level=args.log_level, log_json=args.log_json)
        self.json = args.json
        if self.cache is None:
            self.cache = UsersCache()
        logger.debug("running %s", args.func.__name__)
        self.exit_code = EXIT_SUCCESS
        rc = args.func(args)
        assert rc is None
        return self.exit_code


def format_tb(exc):
    qualname = type(exc).__qualname__
    trace_back = traceback.format_exc()
    return f"""
Error:

{qualname}: {exc}

{trace_back}
"""


def main(argv=None):  # pragma: no cover
    lookup = Lookup()
    argv = sys.argv[1:] if argv is None else argv
    try:
        args = lookup.parse_args(argv)
    except Error as e:
        # we might not have logging setup yet, so get out quickly
        print(e.get_message(), file=sys.stderr)
        sys.exit(e.exit_code)
    except ArgumentTypeError as e:
        print(str(e), file=sys.stderr)
        sys.exit(CommandError.exit_mcode if modern_ec else EXIT_ERROR)
    msg = msgid = tb = None
    tb_log_level = logging.ERROR
    try:
        exit_code = lookup.run(args)
    except Error as e:
        msg = e.get_message()
        msgid = type(e).__qualname__
        tb_log_level = logging.ERROR if e.traceback else logging.DEBUG
        tb = format_tb(e)
        exit_code = e.exit_code
    except Exception as e:
        msg = "Local Exception"
        msgid = "Exception"
        tb_log_level = logging.ERROR
        tb = format_tb(e)
        exit_code = EXIT_ERROR
    if msg:
        logger.error(msg, msgid=msgid)
    if tb:
        logger.log(tb_log_level, tb)
    flush_logging()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
