"""
Visualization Package.

This package provides headless visualization helpers for morphing scenes:
renderer-agnostic element descriptors (CSS 3D transforms) and matplotlib
frame plots used by the command-line driver to inspect layouts and
transitions.
"""

# Visualization Package
