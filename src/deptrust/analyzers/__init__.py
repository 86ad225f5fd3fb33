"""Analyzers that turn collected package data into trust signals."""

from deptrust.analyzers.blast_radius import BlastRadiusCalculator
from deptrust.analyzers.pipeline import TrustPipeline
from deptrust.analyzers.trend import TrendPredictor
from deptrust.analyzers.trust_score import TrustScoreEngine
from deptrust.analyzers.typosquat import TyposquatDetector
from deptrust.analyzers.zombie import ZombieDetector

__all__ = [
    "BlastRadiusCalculator",
    "TrendPredictor",
    "TrustPipeline",
    "TrustScoreEngine",
    "TyposquatDetector",
    "ZombieDetector",
]
