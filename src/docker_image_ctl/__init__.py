"""Resolve how a project's container image is named, built and pushed"""

__version__ = '0.1.0'
