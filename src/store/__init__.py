"""Versioned storage layer.

This module holds the step-versioned store, its flat-mapping codec,
and the argv-style command surface built on top of it.
"""
