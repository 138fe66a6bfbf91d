"""Ingestion layer.

This package turns the exported telemetry documents into validated models
and resolves each reading's overlapping payload fields.
"""

__all__: list[str] = []
