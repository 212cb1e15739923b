"""Tests for shepherd."""
