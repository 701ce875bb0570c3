import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

logger = logging.getLogger(__name__)


class ProviderCategory(str, Enum):
    CLINIC = "clinic"
    HOSPITAL = "hospital"
    DOCTOR = "doctor"
    PHARMACY = "pharmacy"
    LAB = "lab"


class IntentType(str, Enum):
    FIND_PROVIDER = "findProvider"
    EMERGENCY = "emergency"
    HOURS = "hours"
    LOCATION = "location"
    ACCESSIBILITY = "accessibility"
    HOME_VISIT = "homeVisit"
    GREETING = "greeting"
    HELP = "help"
    THANKS = "thanks"
    UNKNOWN = "unknown"


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Address(CamelModel):
    street: str = ""
    city: str = ""


class GeoPoint(CamelModel):
    lat: float
    lon: float


class Provider(CamelModel):
    id: str
    name: str = ""
    name_ar: str = Field("", alias="nameAr")
    name_fr: str = Field("", alias="nameFr")
    specialty: str = ""
    specialty_ar: str = Field("", alias="specialtyAr")
    specialty_fr: str = Field("", alias="specialtyFr")
    type: ProviderCategory
    address: Address = Field(default_factory=Address)
    city: str = ""
    location: Optional[GeoPoint] = None
    phone: Optional[str] = None
    accessibility: bool = False
    home_visits: bool = Field(False, alias="homeVisits")
    available_24_7: bool = Field(False, alias="available24_7")
    verified: bool = False
    claimed: bool = False
    rating: float = 0.0
    view_count: int = Field(0, alias="viewCount")
    images: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    # Computed per request, never stored
    distance_km: Optional[float] = Field(None, alias="distanceKm")
    relevance_score: Optional[float] = Field(None, alias="relevanceScore")


def parse_providers(records: List[dict]) -> List[Provider]:
    """Build Provider models from raw store records, skipping malformed ones."""
    providers = []
    for record in records:
        try:
            providers.append(Provider.model_validate(record))
        except SchemaError as e:
            logger.warning(f"Skipping malformed provider {record.get('id')}: {e}")
    return providers


class SearchFilters(CamelModel):
    accessibility: bool = False
    home_visits: bool = Field(False, alias="homeVisits")
    available_24_7: bool = Field(False, alias="available24_7")


class SearchRequest(CamelModel):
    query: str = ""
    category: Optional[str] = None
    location: Optional[str] = None
    filters: SearchFilters = Field(default_factory=SearchFilters)
    page: int = Field(1, ge=1)
    lat: Optional[float] = None
    lon: Optional[float] = None


class AppliedFilters(CamelModel):
    query: str = ""
    category: Optional[str] = None
    location: Optional[str] = None
    accessibility: bool = False
    home_visits: bool = Field(False, alias="homeVisits")
    available_24_7: bool = Field(False, alias="available24_7")


class ResultPage(CamelModel):
    providers: List[Provider]
    total: int
    page: int
    page_size: int = Field(alias="pageSize")
    has_more: bool = Field(alias="hasMore")
    query_time_ms: float = Field(alias="queryTimeMs")
    filters: AppliedFilters
    from_cache: bool = Field(False, alias="fromCache")


class SuggestionCandidate(CamelModel):
    provider: Provider
    reason: str
    reason_icon: str = Field(alias="reasonIcon")


class Intent(CamelModel):
    type: IntentType
    confidence: float


class QuickReply(CamelModel):
    text: str
    action: str


class ChatRequest(CamelModel):
    message: str = Field(min_length=1)
    language: Optional[str] = None


class ChatReply(CamelModel):
    text: str
    intent: IntentType = IntentType.UNKNOWN
    suggestions: Optional[List[QuickReply]] = None
    providers: Optional[List[Provider]] = None
    action: Optional[str] = None
    error: bool = False


class InteractionRequest(CamelModel):
    provider_id: str = Field(alias="providerId")
    kind: str = "viewed"
    category: Optional[ProviderCategory] = None
