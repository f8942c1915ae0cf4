"""
api: Optional REST front end
============================

Modules
-------
server
    FastAPI application exposing :func:`sim.judge.evaluate` as
    ``POST /evaluate``.
"""
