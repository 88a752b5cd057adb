"""
ugcache argument-parsing layer
==============================

All imports of ``ArgumentParser``, ``Namespace``, ``ArgumentTypeError``, etc.
come from this module. It is the single seam between ugcache and the
underlying parser library (jsonargparse).

jsonargparse stores each subcommand's parsed values in a nested
``Namespace`` object::

    # ugcache --debug user alice 501
    Namespace(
        log_level = "debug",         # top-level
        subcommand = "user",
        user = Namespace(
            idents = ["alice", "501"],
        )
    )

``flatten_namespace()`` collapses this into the single flat ``Namespace``
that the command implementations expect (``args.log_level``,
``args.idents``, ``args.subcommand``).
"""

# here are the only imports from argparse and jsonargparse,
# all other imports of these names import them from here:
from argparse import ArgumentTypeError  # noqa: F401
from jsonargparse import ArgumentParser, Namespace  # noqa: F401


def flatten_namespace(ns):
    """
    Flattens the nested namespace jsonargparse produces for a subcommand into
    a single-level namespace. Subcommand values take precedence over top-level
    values of the same name.
    """
    flat = Namespace()
    for key, value in vars(ns).items():
        if not isinstance(value, Namespace):
            setattr(flat, key, value)
    subcmd = getattr(ns, "subcommand", None)
    subcmd_ns = vars(ns).get(subcmd) if subcmd else None
    if subcmd_ns is not None:
        for key, value in vars(subcmd_ns).items():
            if not isinstance(value, Namespace):
                setattr(flat, key, value)
    return flat
