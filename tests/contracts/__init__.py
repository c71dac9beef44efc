"""Contract tests validating responses against the OpenAPI document."""
