"""crunchycleaner - interactive application cache cleaner.

Finds known cache directories on the host, lets the user pick which
ones to purge, and empties them behind a path safety check.
"""

__version__ = "2.2.0"
