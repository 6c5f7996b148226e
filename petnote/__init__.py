"""petnote - notes and tasks with a companion pet that levels up as you work."""

__version__ = "0.1.0"
