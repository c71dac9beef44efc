"""Security tests for token handling and input hardening."""
