"""Aggregation managers for the workspace statistics service.

Each module provides async functions (or a class) that encapsulate one step
of the request pipeline: access checks, repo resolution, and the stats, Ross
index and contributor aggregations.  Managers accept their collaborators as
parameters and raise domain exceptions (``WorkspaceNotFoundError``,
``CollectorError``), never HTTP exceptions -- that translation is the
router's responsibility.
"""
