"""Typefill - Pour text into the dark (or light) areas of an image.

Typefill reads a raster image, finds the regions matching a tonal criterion,
cuts them into reading-ordered horizontal slots and packs a character stream
into those slots, justifying each line to its slot width.

Example:
    $ typefill portrait.png speech.txt --font Lato-Black.ttf

This will create portrait-typefill.png with the text laid out over the dark
areas of the portrait.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
