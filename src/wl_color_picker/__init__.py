"""Color picker for wlroots based Wayland sessions.

Picks the color of a single pixel with:
- slurp to select the location
- grim to grab the pixel
- GraphicsMagick or ImageMagick to turn it into a hex value
- zenity to optionally tweak the color in a dialog
"""

__version__ = "1.0.0"
