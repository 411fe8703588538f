#!/usr/bin/env python3

"""Output generation services."""

from .listing_generator import ListingGenerator

__all__ = ["ListingGenerator"]
