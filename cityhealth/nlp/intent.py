"""
Keyword intent classifier for the chat assistant.

Deterministic and offline: a message is lowercased and scanned for every
keyword of every intent. There is no word-boundary check, so short keywords
such as "hi" or "os" also match inside longer words.
"""

from typing import Optional

from cityhealth.models import Intent, IntentType
from cityhealth.nlp.lexicon import (
    FALLBACK_LANGUAGE,
    INTENT_PATTERNS,
    SPECIALTY_KEYWORDS,
)


class IntentClassifier:
    """
    Scores a message against each intent's keyword list.

    Parameters
    ----------
    patterns:
        {intent: {language: [keyword, ...]}}, walked in insertion order.
    specialties:
        {language: {specialty: [keyword, ...]}}.
    """

    def __init__(self, patterns: dict = None, specialties: dict = None):
        self._patterns = patterns or INTENT_PATTERNS
        self._specialties = specialties or SPECIALTY_KEYWORDS

    def keywords_for(self, intent: str, language: str) -> list:
        # Fallback is per intent, not per message
        by_language = self._patterns[intent]
        return by_language.get(language) or by_language[FALLBACK_LANGUAGE]

    def classify(self, message: str, language: str) -> Intent:
        """
        Return the intent with the highest keyword-match ratio.

        Confidence is matched keywords / list length for that intent. Ties
        go to the intent declared first; no match at all yields ``unknown``.
        """
        text = message.lower().strip()
        best_type, best_confidence = IntentType.UNKNOWN, 0.0

        for intent in self._patterns:
            keywords = self.keywords_for(intent, language)
            matches = sum(1 for kw in keywords if kw.lower() in text)
            confidence = matches / len(keywords)
            if confidence > best_confidence:
                best_type, best_confidence = IntentType(intent), confidence

        return Intent(type=best_type, confidence=best_confidence)

    def extract_specialty(self, message: str, language: str) -> Optional[str]:
        text = message.lower()
        specialties = self._specialties.get(language) or self._specialties[
            FALLBACK_LANGUAGE
        ]
        for specialty, keywords in specialties.items():
            if any(kw.lower() in text for kw in keywords):
                return specialty
        return None

    def all_intents(self) -> list[str]:
        return list(self._patterns.keys())
