import logging
from typing import Dict, Any, List, Optional

from expense_ai.categorization.rules import KeywordRule
from expense_ai.categorization.categories import OTHER
from expense_ai.config.settings import ConfigLoader
from expense_ai.domain.models import Classification

logger = logging.getLogger(__name__)

# confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_STEP * score)
BASE_CONFIDENCE = 0.6
CONFIDENCE_STEP = 0.1
MAX_CONFIDENCE = 0.95


def confidence_for_score(score: int) -> float:
    """Saturating confidence for a number of distinct keyword matches"""
    return round(min(MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_STEP * score), 2)


class CategorizationEngine:
    """
    Main engine for categorizing receipt text.

    Holds one KeywordRule per taxonomy category, in taxonomy order.
    Every rule scores the text; the highest score wins and ties go
    to the category listed first. Text that matches nothing falls
    back to the configured fallback category.

    Usage:
        # Production - loads from ConfigLoader
        engine = CategorizationEngine()

        # Testing - inject custom config
        test_config = {"categories": [{"category": "food", "keywords": [...]}]}
        engine = CategorizationEngine(config=test_config)

        result = engine.categorize("Lunch at Pizza Place")
        result.category, result.confidence  # ('food', 0.8)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize categorization engine.

        Args:
            config: Optional taxonomy config dict. If None, loads from ConfigLoader.
                Useful for testing with custom configs.

        Raises:
            ValueError: If the taxonomy is empty, repeats a category,
                or has a category without keywords
        """
        self._rules: List[KeywordRule] = []
        self.fallback_category: str = OTHER

        self._build_rules(config)

    def _load_taxonomy_config(
        self,
        config: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Load the taxonomy configuration.

        Args:
            config: Optional config dict. If None, loads from the ConfigLoader.

        Returns:
            Config dictionary with categories
        """
        if config is not None:
            return config

        return ConfigLoader.load_taxonomy_config()

    def _build_rules(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Build one keyword rule per category, preserving taxonomy order."""
        taxonomy_config = self._load_taxonomy_config(config)

        self.fallback_category = taxonomy_config.get("fallback_category", OTHER)

        categories = taxonomy_config.get("categories", [])
        if not categories:
            raise ValueError("Taxonomy must define at least one category")

        seen = set()
        for category_def in categories:
            category = category_def["category"]
            if category in seen:
                raise ValueError(f"Category '{category}' is defined more than once")
            seen.add(category)

            self._rules.append(KeywordRule(category, category_def["keywords"]))

        logger.debug("Loaded taxonomy with %d categories", len(self._rules))

    @property
    def categories(self) -> List[str]:
        """Category labels in taxonomy order"""
        return [rule.category for rule in self._rules]

    def categorize(self, text: str) -> Classification:
        """
        Categorize receipt text.

        Never raises for string input; text without any keyword
        resolves to the fallback category.

        Args:
            text: Raw OCR text

        Returns:
            Classification with category, confidence and winning score

        Example:
            ```
            >>> engine = CategorizationEngine()
            >>> engine.categorize("")
            Classification(category='other', confidence=0.6, score=0)
            ```
        """
        text = text or ""

        best_category = self.fallback_category
        highest_score = 0

        for rule in self._rules:
            score = rule.score(text)
            # Strictly greater: ties keep the earlier category
            if score > highest_score:
                highest_score = score
                best_category = rule.category

        classification = Classification(
            category=best_category,
            confidence=confidence_for_score(highest_score),
            score=highest_score,
        )
        logger.debug("Categorized text as %s (score=%d)", best_category, highest_score)
        return classification

    def get_taxonomy_info(self) -> str:
        """
        Get information about the loaded taxonomy.

        Useful for debugging and understanding which keywords are active.

        Returns:
            String description of the taxonomy, one category per line.
        """
        if not self._rules:
            return "No categories loaded"

        lines = []
        for priority, rule in enumerate(self._rules, start=1):
            lines.append(f"{priority}. {rule.category}: {', '.join(rule.keywords)}")
        lines.append(f"Fallback: {self.fallback_category}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"CategorizationEngine({len(self._rules)} categories)"
