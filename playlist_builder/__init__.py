"""Eclectic playlist builder.

Samples a few tracks from every album and playlist saved in a Spotify
library and appends a random selection to a playlist the user owns.
"""

__version__ = "0.5.0"
