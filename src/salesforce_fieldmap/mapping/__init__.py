"""Internal mapping subpackage.

All functions here are pure: no network I/O, no shared mutable state. The
public API lives in the ``salesforce_fieldmap.mapper`` facade; import from
this package directly only for internals (tests, custom tables).

Modules:
    metadata: Field -> descriptor tables per record type
    selection: Rank eligibility and payload building
    time_utils: Salesforce datetime string codec
"""
from __future__ import annotations

from . import metadata as metadata  # noqa: F401
from . import selection as selection  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["metadata", "selection", "time_utils"]
