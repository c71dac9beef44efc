"""Unit tests that exercise components without the HTTP layer."""
