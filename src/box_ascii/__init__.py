"""box-ascii — render a random Box folder image as colored ASCII art.

Authenticates with a Box enterprise JWT grant, downloads one image and
prints it to the terminal.
"""

from box_ascii.version import __version__

__all__: list[str] = ["__version__"]
