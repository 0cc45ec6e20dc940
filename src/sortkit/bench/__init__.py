"""Timing harness and YAML-driven experiment runner."""
