"""Tests for the GridION run audit."""
