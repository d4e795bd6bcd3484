"""
goalcache.integrations - External Service Integrations
========================================================

Adapters for the services the goal cache depends on. Currently the only
one is object storage (see goalcache.integrations.storage).
"""
