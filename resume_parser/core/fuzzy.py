"""
Fuzzy Matcher - Approximate text matching for job search and skill matching.

Matching is tried in order:
- Case-insensitive substring
- Synonym table (enhanced mode only)
- Per-word Levenshtein similarity, prefix or suffix match
"""

from types import MappingProxyType
import re


DEFAULT_THRESHOLD = 0.7
ENHANCED_THRESHOLD = 0.75

_NON_WORD = re.compile(r"[^\w]")


# Common word variations for job search
VARIATIONS = MappingProxyType({
    "engineer": ("engineering", "engineers", "eng"),
    "engineering": ("engineer", "engineers", "eng"),
    "developer": ("development", "dev", "developers"),
    "development": ("developer", "dev", "developers"),
    "manager": ("management", "managing", "mgr"),
    "management": ("manager", "managing", "mgr"),
    "analyst": ("analysis", "analyze", "analytics"),
    "analysis": ("analyst", "analyze", "analytics"),
    "designer": ("design", "designing", "designs"),
    "design": ("designer", "designing", "designs"),
    "specialist": ("specialization", "specialized", "spec"),
    "coordinator": ("coordination", "coordinating", "coord"),
    "administrator": ("administration", "admin", "administrative"),
    "technician": ("technical", "tech", "technology"),
    "consultant": ("consulting", "consultation", "advisory"),
    "assistant": ("assist", "support", "aide"),
    "executive": ("exec", "leadership", "senior"),
    "representative": ("rep", "representative", "sales"),
    "javascript": ("js", "node", "react", "vue"),
    "python": ("py", "django", "flask"),
    "frontend": ("front-end", "front end", "ui", "client-side"),
    "backend": ("back-end", "back end", "server-side", "api"),
    "fullstack": ("full-stack", "full stack"),
    "devops": ("dev-ops", "dev ops", "deployment", "infrastructure"),
    "remote": ("work from home", "wfh", "telecommute", "distributed"),
})


def levenshtein_distance(str1: str, str2: str) -> int:
    """Edit distance with unit cost insert, delete and substitute."""
    if len(str1) < len(str2):
        str1, str2 = str2, str1

    previous = list(range(len(str2) + 1))
    for i, char1 in enumerate(str1, 1):
        current = [i]
        for j, char2 in enumerate(str2, 1):
            cost = 0 if char1 == char2 else 1
            current.append(min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost,
            ))
        previous = current

    return previous[-1]


def similarity(str1: str, str2: str) -> float:
    """Similarity in [0, 1]; 1.0 means identical."""
    longest = max(len(str1), len(str2))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(str1, str2)) / longest


class FuzzyMatcher:
    """Case-insensitive approximate matcher. Stateless; safe to share."""

    def __init__(self, variations=VARIATIONS):
        self.variations = variations

    def fuzzy_match(self, text: str, search_term: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
        """Check whether every word of the search term approximately occurs in the text."""
        text_lower = text.lower()
        search_lower = search_term.lower()

        if search_lower in text_lower:
            return True

        words = [_NON_WORD.sub("", word) for word in text_lower.split()]
        words = [word for word in words if word]

        for search_word in search_lower.split():
            clean_search_word = _NON_WORD.sub("", search_word)
            if not clean_search_word:
                # Punctuation-only words can never match
                return False

            if not any(self._words_match(word, clean_search_word, threshold) for word in words):
                return False

        return True

    def enhanced_match(self, text: str, search_term: str) -> bool:
        """Match using the job search synonym table before falling back to fuzzy matching."""
        text_lower = text.lower()
        search_lower = search_term.lower()

        if search_lower in text_lower:
            return True

        for key, values in self.variations.items():
            if key in search_lower and any(value in text_lower for value in values):
                return True

            # Reverse check: text has the key, search has a variation
            if key in text_lower and any(value in search_lower for value in values):
                return True

        return self.fuzzy_match(text, search_term, ENHANCED_THRESHOLD)

    @staticmethod
    def _words_match(word: str, search_word: str, threshold: float) -> bool:
        if similarity(word, search_word) >= threshold:
            return True
        if word.startswith(search_word) or search_word.startswith(word):
            return True
        return word.endswith(search_word) or search_word.endswith(word)


_default_matcher = FuzzyMatcher()


def matches(haystack: str, query: str, threshold: float = DEFAULT_THRESHOLD, enhanced: bool = False) -> bool:
    """Module-level shortcut around a shared FuzzyMatcher."""
    if enhanced:
        return _default_matcher.enhanced_match(haystack, query)
    return _default_matcher.fuzzy_match(haystack, query, threshold)
