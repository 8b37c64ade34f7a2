"""blockfall: a falling-block puzzle game core with pygame and GIF front-ends."""

__version__ = "0.1.0"
