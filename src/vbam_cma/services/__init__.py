"""
VBAM Services.

Campaign persistence used by the moderator's assistant front ends.
"""

from __future__ import annotations

__all__ = [
    "campaign_store",
]
