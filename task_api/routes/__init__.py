"""
Route blueprints for the Task Manager API.

- health: liveness probe
- auth:   login and token issuance
- users:  registration and user CRUD
- tasks:  task CRUD, listing and statistics
"""
