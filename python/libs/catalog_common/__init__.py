"""Shared models for the product catalog."""
