"""Error taxonomy shared by the search, suggestion and chat layers."""


class CityHealthError(Exception):
    """Base class for errors raised by the directory core."""

    retryable = False


class ValidationError(CityHealthError):
    """Malformed request shape. A caller bug; never retried."""


class QueryFailure(CityHealthError):
    """The backing document store rejected or failed a query."""

    retryable = True


class NotFound(CityHealthError):
    """No record exists for the requested identifier."""


SEARCH_FAILED = {
    "en": "Failed to search providers. Please try again.",
    "fr": "La recherche de prestataires a échoué. Veuillez réessayer.",
    "ar": "فشل البحث عن مقدمي الخدمة. يرجى المحاولة مرة أخرى.",
}

INVALID_REQUEST = {
    "en": "The request is invalid.",
    "fr": "La requête est invalide.",
    "ar": "الطلب غير صالح.",
}

NOT_FOUND = {
    "en": "The requested resource was not found.",
    "fr": "La ressource demandée est introuvable.",
    "ar": "المورد المطلوب غير موجود.",
}


def user_message(error: CityHealthError, language: str = "en") -> str:
    if isinstance(error, ValidationError):
        table = INVALID_REQUEST
    elif isinstance(error, NotFound):
        table = NOT_FOUND
    else:
        table = SEARCH_FAILED
    return table.get(language, table["en"])
