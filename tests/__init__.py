"""
Test suite for the Task Manager API.

This package contains:
- unit/: models, token and validation logic without the HTTP layer
- integration/: endpoints exercised through the Flask test client
- security/: token handling and input-hardening checks
- contracts/: responses validated against the OpenAPI contract
"""
