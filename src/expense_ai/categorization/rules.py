from typing import List


class KeywordRule:
    """
    Rule that scores receipt text against the keywords of one category.

    Features:
    - Case-insensitive substring matching
    - Each keyword counts at most once, however often it appears
    - Duplicate keywords in the config are collapsed

    Example:
        ```
        rule = KeywordRule("food", ["pizza", "lunch", "burger"])
        rule.score("Lunch at Pizza Place")  # 2
        ```
    """

    def __init__(self, category: str, keywords: List[str]):
        """
        Initialize keyword rule

        Args:
            category: Category label this rule votes for
            keywords: Ordered keywords associated with the category

        Raises:
            ValueError: If the category has no usable keyword
        """
        self.category = category
        self.keywords = list(keywords)

        # Pre-process keywords for case-insensitive matching
        self._normalized_keywords: List[str] = list(dict.fromkeys(
            kw.casefold() for kw in self.keywords if kw and kw.strip()
        ))

        if not self._normalized_keywords:
            raise ValueError(f"Category '{category}' must have at least one keyword")

    def matched_keywords(self, text: str) -> List[str]:
        """Keywords of this rule that occur in the text"""
        normalized = text.casefold()
        return [kw for kw in self._normalized_keywords if kw in normalized]

    def score(self, text: str) -> int:
        """Number of distinct keywords found in the text"""
        return len(self.matched_keywords(text))

    def __repr__(self):
        return f"KeywordRule('{self.category}', {len(self._normalized_keywords)} keywords)"
