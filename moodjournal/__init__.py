"""
Local persistence core for the mood journal.
"""
__version__ = "0.1.0"
