import copy

import pytest

from cityhealth.core.errors import QueryFailure
from cityhealth.models import Provider
from cityhealth.search.service import SearchService
from cityhealth.storage.local import LocalStorage
from cityhealth.store.base import QueryResult

SBA = "Sidi Bel Abbès"


def _address(street, city):
    return {"street": street, "city": city}


PROVIDER_DOCS = [
    {
        "id": "p1",
        "name": "Heart Care Clinic",
        "nameFr": "Clinique du Cœur",
        "nameAr": "عيادة القلب",
        "specialty": "Cardiology",
        "specialtyFr": "Cardiologie",
        "specialtyAr": "أمراض القلب",
        "type": "clinic",
        "address": _address("12 Rue Larbi Ben M'hidi", SBA),
        "city": SBA,
        "location": {"lat": 35.1899, "lon": -0.6309},
        "accessibility": True,
        "homeVisits": False,
        "available24_7": False,
        "verified": True,
        "rating": 4.8,
        "viewCount": 120,
    },
    {
        "id": "p2",
        "name": "Skin Clinic",
        "nameFr": "Clinique de la Peau",
        "nameAr": "عيادة الجلد",
        "specialty": "Dermatology",
        "specialtyFr": "Dermatologie",
        "specialtyAr": "الأمراض الجلدية",
        "type": "clinic",
        "address": _address("5 Boulevard de la République", SBA),
        "city": SBA,
        "verified": True,
        "rating": 4.5,
        "viewCount": 80,
    },
    {
        "id": "p3",
        "name": "Hassani Abdelkader University Hospital",
        "nameFr": "CHU Hassani Abdelkader",
        "nameAr": "المستشفى الجامعي",
        "specialty": "Emergency Medicine",
        "specialtyFr": "Médecine d'urgence",
        "type": "hospital",
        "address": _address("Route de Tlemcen", SBA),
        "city": SBA,
        "accessibility": True,
        "available24_7": True,
        "verified": True,
        "rating": 4.2,
        "viewCount": 300,
    },
    {
        "id": "p4",
        "name": "Central Pharmacy",
        "nameFr": "Pharmacie Centrale",
        "type": "pharmacy",
        "address": _address("Place du 1er Novembre", "Oran"),
        "city": "Oran",
        "available24_7": True,
        "verified": True,
        "rating": 4.0,
        "viewCount": 50,
    },
    {
        "id": "p5",
        "name": "Dr. Unverified",
        "specialty": "Cardiology",
        "type": "doctor",
        "address": _address("Rue Inconnue", SBA),
        "city": SBA,
        "verified": False,
        "rating": 5.0,
    },
    {
        "id": "p6",
        "name": "BioLab Analyses",
        "specialty": "Medical Analysis",
        "type": "lab",
        "address": _address("Rue Khemisti", "Oran"),
        "city": "Oran",
        "homeVisits": True,
        "verified": True,
        "rating": 3.9,
        "viewCount": 40,
    },
    {
        "id": "p7",
        "name": "Dr. Amina Benali",
        "specialty": "Pediatrics",
        "specialtyFr": "Pédiatrie",
        "type": "doctor",
        "address": _address("Cité 20 Août", SBA),
        "city": SBA,
        "homeVisits": True,
        "verified": True,
        "rating": 4.6,
        "viewCount": 90,
    },
    {
        "id": "p8",
        "name": "El Amel Laboratory",
        "specialty": "Medical Analysis",
        "type": "lab",
        "address": _address("Rue des Frères Adnane", SBA),
        "city": SBA,
        "verified": True,
        "rating": 3.5,
        "viewCount": 10,
    },
]


class FakeStore:
    """
    In-memory DocumentStore. Cursors are positions in the sorted result,
    and every call is recorded in ``calls``.
    """

    def __init__(self, collections: dict):
        self.collections = collections
        self.calls = []
        self.fail_when = None
        self.closed = False

    async def query(self, collection, filters, order_by, limit, start_after=None):
        self.calls.append(
            {
                "collection": collection,
                "filters": list(filters),
                "order_by": list(order_by),
                "limit": limit,
                "start_after": start_after,
            }
        )
        if self.fail_when is not None and self.fail_when(list(filters)):
            raise QueryFailure("store unavailable")

        docs = [
            d
            for d in self.collections.get(collection, [])
            if all(d.get(field) == value for field, value in filters)
        ]
        for field, direction in reversed(list(order_by)):
            docs.sort(key=lambda d: d.get(field, 0), reverse=direction == "desc")

        start = start_after or 0
        page = docs[start : start + limit]
        last_cursor = start + len(page) if page else None
        return QueryResult(records=[dict(d) for d in page], last_cursor=last_cursor)

    async def close(self):
        self.closed = True


@pytest.fixture
def provider_docs():
    return copy.deepcopy(PROVIDER_DOCS)


@pytest.fixture
def providers(provider_docs):
    return {doc["id"]: Provider.model_validate(doc) for doc in provider_docs}


@pytest.fixture
def store(provider_docs):
    return FakeStore({"providers": provider_docs})


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def search_service(store):
    return SearchService(store, page_size=20)
