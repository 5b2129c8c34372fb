"""Small socket and filesystem drills: multicast chat, a two-client TCP relay and a symlink depth probe."""

__version__ = "0.1.0"