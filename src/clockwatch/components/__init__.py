"""Components for the clockwatch screen."""

from clockwatch.components.block import Block
from clockwatch.components.paragraph import Alignment, Paragraph

__all__ = [
    "Alignment",
    "Block",
    "Paragraph",
]
