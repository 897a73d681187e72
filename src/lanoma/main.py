from __future__ import annotations

"""
Process Entry Point.

Running this file straight from a source checkout works without an
installation: the 'src' directory is put on sys.path before the CLI
controller is imported. Anything that escapes the controller ends in the
crash hook below, which logs the trace and exits with status 1.
"""

import logging
import os
import sys
import traceback
from types import TracebackType
from typing import Optional

# -----------------------------------------------------------------------------
# SOURCE CHECKOUT SUPPORT
# -----------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_SRC_DIR = os.path.dirname(_PACKAGE_DIR)
if not getattr(sys, "frozen", False) and _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

# -----------------------------------------------------------------------------
# CRASH HOOK
# -----------------------------------------------------------------------------

def crash_hook(
        exctype: type[BaseException],
        value: BaseException,
        tb: Optional[TracebackType],
) -> None:
    """
    Report an uncaught exception and terminate.

    Ctrl-C keeps the interpreter's default behaviour; anything else is
    logged at CRITICAL and printed to stderr under a banner.
    """
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, tb)
        return

    trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("lanoma.crash").critical(f"Uncaught exception: {value}\n{trace}")

    banner = "=" * 80
    sys.stderr.write(f"\n{banner}\nCRITICAL ERROR (LANOMA CLI)\n{banner}\n{trace}\n")
    sys.exit(1)


sys.excepthook = crash_hook

# -----------------------------------------------------------------------------
# ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    from lanoma.interface.cli.app import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
