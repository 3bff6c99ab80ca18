"""
ssas-to-mondrian: Analysis Services cube metadata to Mondrian schema conversion.

Architecture:
    Snapshot → Ingestion (SnapshotProvider) → Core (SchemaBuilder) → Adapter → .xml

Layers:
    - domain/: Source cube model (ssas.py) and target schema tree (mondrian.py)
    - ingestion/: Metadata provider protocol and snapshot loading
    - core/: Taxonomy mapping, identifier resolution, classification, building
    - adapters/: Output-specific rendering (Mondrian XML)

Key Concepts:
    - Each measure group becomes one Mondrian cube
    - Cube dimensions become shared dimensions referenced by DimensionUsage
    - One virtual cube unions every measure group cube
"""

__version__ = "0.1.0"
