# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
"""One-time warning for the legacy ``context`` tap option."""

import os
import threading
import warnings

from loguru import logger


CONTEXT_DEPRECATION_MESSAGE = "Hook.context is deprecated and will be removed"

# Warnings are attributed to the first frame outside the tapline package.
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep

_warned = False
_enabled = True
_lock = threading.Lock()


def warn_context_deprecated() -> None:
    """Emit the ``context`` deprecation warning once per process."""
    global _warned
    if _warned or not _enabled:
        return
    with _lock:
        if _warned:
            return
        _warned = True
    warnings.warn(
        CONTEXT_DEPRECATION_MESSAGE,
        DeprecationWarning,
        skip_file_prefixes=(_PACKAGE_DIR,),
    )
    logger.warning(CONTEXT_DEPRECATION_MESSAGE)


def set_deprecation_warnings(enabled: bool) -> None:
    """Enable or silence the ``context`` deprecation warning."""
    global _enabled
    _enabled = enabled


def reset_deprecation_state() -> None:
    """Forget that the warning was emitted.

    Useful for testing.
    """
    global _warned, _enabled
    _warned = False
    _enabled = True
