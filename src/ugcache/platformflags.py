"""
Flags for platform-specific APIs.

Use these flags instead of sys.platform.startswith('<os>') or try/except.
"""

import sys

is_win32 = sys.platform.startswith("win32")

# whether the pwd / grp identity database modules are available
has_identity_db = not is_win32
