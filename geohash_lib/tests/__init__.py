"""Tests for geohash_lib."""
