"""
Integration tests for the Task Manager API.

Tests use the Flask test client against a real SQLite database and cover
status codes, response bodies and persistence effects.
"""
