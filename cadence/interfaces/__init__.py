"""Interfaces layer for cadence.

Front ends that drive the engine. Only a command-line interface exists.
"""
