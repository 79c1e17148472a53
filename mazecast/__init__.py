"""Frame buffers, PCX images, light tables and raycasting maze renderers."""

__version__ = "0.1.0"