"""Core type definitions."""

from typing import NewType

# Index of a node inside a NavTree arena
# Distinct from plain int to catch mixups with list positions
NodeId = NewType("NodeId", int)
