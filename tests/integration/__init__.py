"""
Integration tests.

These tests need a running Redis server and are skipped unless
USE_REAL_REDIS=1 is set.
"""
