"""
Tests Package.

This package contains test suites for validating the layout morphing engine,
including unit tests for layout generation, easing and transition
orchestration, and integration tests driving transitions through the frame
clock. The tests ensure correctness of the layout geometry, the
cancel-and-restart semantics, and the completion timing.
"""

# Tests Package
