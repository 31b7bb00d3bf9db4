from .statistics import PriceSummary, compute_summary

__all__ = ["PriceSummary", "compute_summary"]
