"""
Boundary layer for external system integrations.

Handles all interactions with external systems (record store API, job
state stores). Provides adapters and clients for infrastructure dependencies.
"""
