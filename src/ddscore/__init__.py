"""ddscore: technical due-diligence risk scoring engine."""

__version__ = "0.1.0"
