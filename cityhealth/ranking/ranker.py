from typing import List

from geopy.distance import geodesic

from cityhealth.models import Provider

# Per-token relevance weights
WEIGHT_NAME = 10
WEIGHT_SPECIALTY = 5
WEIGHT_CATEGORY = 3
WEIGHT_CITY = 2
BOOST_VERIFIED = 1
RATING_FACTOR = 0.5


def tokenize(query: str) -> List[str]:
    return query.lower().split()


def searchable_text(provider: Provider) -> str:
    parts = [
        provider.name,
        provider.name_ar,
        provider.name_fr,
        provider.specialty,
        provider.specialty_ar,
        provider.specialty_fr,
        provider.address.street,
        provider.address.city,
        provider.type.value,
    ]
    return " ".join(parts).lower()


class Ranker:
    def filter(self, providers: List[Provider], query: str) -> List[Provider]:
        """Keep providers whose searchable text contains every query token."""
        terms = tokenize(query)
        kept = []
        for provider in providers:
            text = searchable_text(provider)
            if all(term in text for term in terms):
                kept.append(provider)
        return kept

    def score(self, provider: Provider, terms: List[str]) -> float:
        names = [provider.name, provider.name_ar, provider.name_fr]
        specialties = [
            provider.specialty,
            provider.specialty_ar,
            provider.specialty_fr,
        ]
        category = provider.type.value
        city = provider.address.city.lower()

        score = 0.0
        for term in terms:
            score += WEIGHT_NAME * sum(term in n.lower() for n in names)
            score += WEIGHT_SPECIALTY * sum(term in s.lower() for s in specialties)
            if term in category:
                score += WEIGHT_CATEGORY
            if term in city:
                score += WEIGHT_CITY

        if provider.verified:
            score += BOOST_VERIFIED
        score += provider.rating * RATING_FACTOR
        return score

    def rank(self, providers: List[Provider], query: str) -> List[Provider]:
        terms = tokenize(query)
        ranked_results = []
        for provider in providers:
            ranked_results.append(
                provider.model_copy(
                    update={"relevance_score": self.score(provider, terms)}
                )
            )

        # Sort desc; stable, so equal scores keep the store's order
        ranked_results.sort(key=lambda p: p.relevance_score, reverse=True)
        return ranked_results

    def annotate_distances(
        self, providers: List[Provider], user_lat: float, user_lon: float
    ) -> List[Provider]:
        annotated = []
        for provider in providers:
            if provider.location is None:
                annotated.append(provider)
                continue
            dist_km = geodesic(
                (user_lat, user_lon), (provider.location.lat, provider.location.lon)
            ).km
            annotated.append(provider.model_copy(update={"distance_km": dist_km}))
        return annotated
