"""
egdb: EpiGraphDB client and relation-graph grouping

A small client for the EpiGraphDB knowledge-graph API that returns results as
tables, plus the analysis pattern used in the pleiotropy case study:

    Gene → Protein → shared Pathway / PPI → Graph → Connected groups

Core constraints:
- Graph building and grouping are pure (no network I/O)
- All HTTP access goes through egdb.api
- Unknown relations are never treated as negative results
"""

__version__ = "0.1.0"
