"""Pydantic models for reviewbuilder."""
