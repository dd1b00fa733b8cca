"""Group assembler package."""

from .group_assembler import (
    GroupAssembler,
    find_cross_group_duplicates,
    warn_cross_group_duplicates,
)

__all__ = [
    "GroupAssembler",
    "find_cross_group_duplicates",
    "warn_cross_group_duplicates",
]
