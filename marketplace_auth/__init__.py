"""Marketplace authentication and session core."""
