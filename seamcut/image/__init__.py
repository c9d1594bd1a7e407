"""Image-facing side of SeamCut.

Pixel grids and seed regions, the grid graph builder, the cut compositor and
Pillow-based image file I/O.
"""
