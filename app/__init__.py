"""
FastAPI Application Package

Exposes the price client over HTTP: one route per lookup, backed by the
exchange registry and a shared HTTP requester.
"""
