"""
Domain layer for the asset registry.
Contains the role authority, the asset ledger and the per-asset logs,
separated from data persistence and presentation concerns.
"""
