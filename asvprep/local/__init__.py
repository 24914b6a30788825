"""
asvprep data-conversion scripts.

Each module is a standalone command (``python -m asvprep.local.<name>``).
The pipeline only ever runs them in a child process.
"""
