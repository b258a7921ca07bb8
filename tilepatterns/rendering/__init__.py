"""
Rendering.

PIL-based images of auto-tiling results, used by the command-line tools.
"""
