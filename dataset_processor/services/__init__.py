"""Core services: reducers, exercise analyses, rendering and orchestration."""
