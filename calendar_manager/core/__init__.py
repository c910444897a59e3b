"""
Core utilities: configuration, exceptions, logging, paths and validation.
"""
