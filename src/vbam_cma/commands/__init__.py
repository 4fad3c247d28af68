"""
VBAM Commands

Command implementations for the vbam-cma CLI.
Each module handles a logical group of related commands.
"""

from . import campaign

__all__ = [
    "campaign",
]
