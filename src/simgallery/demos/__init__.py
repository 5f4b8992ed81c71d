"""
Auto-import all demonstration modules so their ``@demo`` registrations run.

After importing this package, ``install_demos(registry)`` copies every
built-in demonstration into a runtime registry.
"""
from __future__ import annotations

import importlib
import pkgutil

from simgallery.demos.catalog import install_demos, list_demos

for _module in pkgutil.iter_modules(__path__, __name__ + "."):
    importlib.import_module(_module.name)

__all__ = ["install_demos", "list_demos"]
