"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(record store, settings, logging, error mapping). Keep feature-specific
persistence and business logic in the corresponding feature package
(e.g. `articles/`).
"""

