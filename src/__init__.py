"""Application Layer.

Infrastructure and application services that orchestrate domain logic.
This layer handles I/O (catalog documents) and coordinates domain
operations (planning facade, parallel sweeps).
"""
