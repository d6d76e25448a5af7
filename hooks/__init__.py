"""CoW hooks — hook builders."""

from .claim import build_claim_hook
from .permit import build_permit_hook
from .transfer_from import build_transfer_from_hook

__all__ = [
    "build_claim_hook",
    "build_permit_hook",
    "build_transfer_from_hook",
]
