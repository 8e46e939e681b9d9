"""Domain layer for whatdo.

Everything under this package is pure: no file access, no subprocesses.
"""
