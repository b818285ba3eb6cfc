"""
db/ - Database Layer
====================
Handles PostgreSQL connections and schema initialization for the
author and tweet tables.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
