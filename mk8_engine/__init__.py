"""MK8 Build Optimizer: kart build search over Mario Kart 8 Deluxe component stats."""

__version__ = "0.1.0"
