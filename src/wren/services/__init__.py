"""Service locators — the service manager and its namespaced extensions.

Registries are compiled at startup; managers are built per request and
resolve names lazily against them.
"""
