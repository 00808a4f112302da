"""
Backend FakeCheck — heuristic fake-account detection for social-media data.

Scores bulk-uploaded account records with a fixed set of independent,
explainable signals and classifies each account into a LOW / MEDIUM / HIGH
risk tier. Modular layout: detection engine (the decision logic), record
ingestion, CSV export, and a thin FastAPI service layer.
"""

__version__ = "0.1.0"
