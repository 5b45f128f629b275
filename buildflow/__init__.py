"""
buildflow: build orchestration for the desktop application shell.

Wires together CSS compilation, static-file synchronization and Electron
packaging as named steps composed in series and in parallel.
"""

__version__ = "0.1.0"
