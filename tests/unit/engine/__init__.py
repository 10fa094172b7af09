"""Tests for label resolution and form filling."""
