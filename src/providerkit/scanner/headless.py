"""Recognition of errors raised because no display is available.

GUI toolkits fail at import time on headless machines (CI runners, servers
without X). The class scanner treats such failures as the plugin being
unavailable rather than as a misconfiguration.
"""

from __future__ import annotations

import re

from providerkit.exceptions import HeadlessEnvironmentError

# Messages emitted by tk, Qt and GTK when no display can be opened.
_DISPLAY_PATTERN = re.compile(
    r"\$DISPLAY|no display|connect to (?:the )?(?:x server|display)",
    re.IGNORECASE,
)


def is_headless_error(exc: BaseException | None) -> bool:
    """Check ``exc`` and its cause/context chain for a display failure."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, HeadlessEnvironmentError):
            return True
        if _DISPLAY_PATTERN.search(str(exc)):
            return True
        exc = exc.__cause__ or exc.__context__
    return False
