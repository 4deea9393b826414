"""
Categorization system for receipt interpretation.

Scores receipt text against a fixed keyword taxonomy and returns
a category with a confidence estimate.

Quick Start:
    >>> from expense_ai.categorization import CategorizationEngine
    >>>
    >>> engine = CategorizationEngine()
    >>> result = engine.categorize("Lunch at Pizza Place")
    >>> print(f"Categorized as: {result.category} ({result.confidence})")
"""
from expense_ai.categorization.categorizer import CategorizationEngine, confidence_for_score
from expense_ai.categorization.rules import KeywordRule
from expense_ai.categorization import categories

__all__ = [
    "CategorizationEngine",
    "KeywordRule",
    "confidence_for_score",
    "categories",
]
