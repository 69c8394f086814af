"""Agents that drive the two remote Gemini calls."""
