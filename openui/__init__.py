"""Software rendering on 16-bit bitmaps: primitives, masks, blitting and BMP loading."""

__version__ = "0.1.0"

__all__ = ["helpers", "files", "colors", "bitmap", "shapes", "blit", "bmpfile", "numbers"]