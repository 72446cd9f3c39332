"""Property-based tests.

Run with more examples via HYPOTHESIS_PROFILE=nightly.
"""
