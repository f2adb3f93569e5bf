"""
repositories/ - Data Access Layer
==================================
Each repository owns one persisted collection in key-value storage.
Repositories decode raw JSON from storage and return domain model objects;
they never read another repository's key.
"""
