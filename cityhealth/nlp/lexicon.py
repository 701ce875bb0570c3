"""
Static keyword lexicon for the chat assistant.

Intent order matters: the classifier walks INTENT_PATTERNS in insertion order
and an earlier intent wins a confidence tie.
"""

SUPPORTED_LANGUAGES = ("ar", "fr", "en")
FALLBACK_LANGUAGE = "en"

INTENT_PATTERNS = {
    "findProvider": {
        "en": ["find", "search", "looking for", "need", "where", "doctor", "clinic", "hospital", "pharmacy", "lab"],
        "fr": ["trouver", "chercher", "cherche", "besoin", "où", "docteur", "clinique", "hôpital", "pharmacie", "laboratoire"],
        "ar": ["ابحث", "أبحث", "أريد", "أين", "طبيب", "عيادة", "مستشفى", "صيدلية", "مختبر", "دكتور"],
    },
    "emergency": {
        "en": ["emergency", "urgent", "now", "24/7", "immediate", "asap"],
        "fr": ["urgence", "urgent", "maintenant", "24/7", "immédiat", "tout de suite"],
        "ar": ["طوارئ", "عاجل", "الآن", "فوري", "مستعجل"],
    },
    "hours": {
        "en": ["hours", "open", "close", "available", "when", "time", "schedule"],
        "fr": ["heures", "ouvert", "fermé", "disponible", "quand", "horaire"],
        "ar": ["ساعات", "مفتوح", "مغلق", "متاح", "متى", "وقت", "مواعيد"],
    },
    "location": {
        "en": ["where", "location", "address", "directions", "map", "how to get"],
        "fr": ["où", "emplacement", "adresse", "directions", "carte", "comment aller"],
        "ar": ["أين", "موقع", "عنوان", "اتجاهات", "خريطة", "كيف أصل"],
    },
    "accessibility": {
        "en": ["wheelchair", "accessible", "disability", "handicap"],
        "fr": ["fauteuil roulant", "accessible", "handicap"],
        "ar": ["كرسي متحرك", "متاح", "إعاقة", "معاق"],
    },
    "homeVisit": {
        "en": ["home visit", "house call", "come to", "visit home"],
        "fr": ["visite à domicile", "venir à", "domicile"],
        "ar": ["زيارة منزلية", "يأتي للمنزل", "في البيت"],
    },
    "greeting": {
        "en": ["hello", "hi", "hey", "good morning", "good afternoon", "good evening"],
        "fr": ["bonjour", "salut", "bonsoir"],
        "ar": ["مرحبا", "السلام عليكم", "أهلا", "صباح الخير", "مساء الخير"],
    },
    "help": {
        "en": ["help", "how", "what can", "assist", "support"],
        "fr": ["aide", "comment", "que peux", "assister", "support"],
        "ar": ["مساعدة", "كيف", "ماذا يمكن", "ساعد"],
    },
    "thanks": {
        "en": ["thank", "thanks", "appreciate"],
        "fr": ["merci", "remercie"],
        "ar": ["شكرا", "شكراً", "متشكر"],
    },
}

SPECIALTY_KEYWORDS = {
    "en": {
        "cardiology": ["heart", "cardiac", "cardiology"],
        "dentistry": ["teeth", "dental", "dentist"],
        "pediatrics": ["child", "children", "pediatric", "baby", "kid"],
        "dermatology": ["skin", "dermatology"],
        "orthopedics": ["bone", "orthopedic", "fracture"],
        "ophthalmology": ["eye", "vision", "ophthalmology"],
        "gynecology": ["women", "gynecology", "pregnancy"],
    },
    "fr": {
        "cardiology": ["cœur", "cardiaque", "cardiologie"],
        "dentistry": ["dents", "dentaire", "dentiste"],
        "pediatrics": ["enfant", "pédiatrique", "bébé"],
        "dermatology": ["peau", "dermatologie"],
        "orthopedics": ["os", "orthopédique", "fracture"],
        "ophthalmology": ["œil", "vision", "ophtalmologie"],
        "gynecology": ["femmes", "gynécologie", "grossesse"],
    },
    "ar": {
        "cardiology": ["قلب", "قلبية"],
        "dentistry": ["أسنان", "طبيب أسنان"],
        "pediatrics": ["أطفال", "طفل", "رضيع"],
        "dermatology": ["جلد", "جلدية"],
        "orthopedics": ["عظام", "كسر"],
        "ophthalmology": ["عين", "بصر", "عيون"],
        "gynecology": ["نساء", "حمل", "نسائية"],
    },
}
