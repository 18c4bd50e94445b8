"""Rendering pipeline: discovery, rendering and dispatch."""
