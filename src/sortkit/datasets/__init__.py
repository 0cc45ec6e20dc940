"""
Datasets package public API.

Re-export the dataset generator so callers can write:
    from sortkit.datasets import make_dataset, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, WIDTH_DOMAINS, make_dataset

__all__ = ["make_dataset", "SUPPORTED_DISTS", "WIDTH_DOMAINS"]
