"""providerkit: Lazy service-provider discovery and module-path class scanning."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"
