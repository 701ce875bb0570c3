"""Localized chat reply templates (ar/fr/en) and quick replies."""

from cityhealth.models import QuickReply
from cityhealth.nlp.lexicon import FALLBACK_LANGUAGE

GREETING = {
    "en": "Hello! I'm here to help you find healthcare providers in Sidi Bel Abbès. You can ask me about doctors, clinics, hospitals, pharmacies, or labs. How can I assist you today?",
    "fr": "Bonjour ! Je suis là pour vous aider à trouver des prestataires de soins de santé à Sidi Bel Abbès. Vous pouvez me poser des questions sur les médecins, les cliniques, les hôpitaux, les pharmacies ou les laboratoires. Comment puis-je vous aider aujourd'hui ?",
    "ar": "مرحباً! أنا هنا لمساعدتك في العثور على مقدمي الرعاية الصحية في سيدي بلعباس. يمكنك أن تسألني عن الأطباء أو العيادات أو المستشفيات أو الصيدليات أو المختبرات. كيف يمكنني مساعدتك اليوم؟",
}

HELP = {
    "en": "I can help you with:\n• Finding doctors, clinics, hospitals, pharmacies, or labs\n• Emergency services (24/7 available)\n• Providers with wheelchair accessibility\n• Providers offering home visits\n• Operating hours and locations\n\nJust ask me what you need!",
    "fr": "Je peux vous aider avec :\n• Trouver des médecins, cliniques, hôpitaux, pharmacies ou laboratoires\n• Services d'urgence (disponibles 24h/24 et 7j/7)\n• Prestataires accessibles en fauteuil roulant\n• Prestataires proposant des visites à domicile\n• Horaires d'ouverture et emplacements\n\nDemandez-moi simplement ce dont vous avez besoin !",
    "ar": "يمكنني مساعدتك في:\n• العثور على الأطباء والعيادات والمستشفيات والصيدليات أو المختبرات\n• خدمات الطوارئ (متاحة 24/7)\n• مقدمي الخدمة مع إمكانية الوصول بالكراسي المتحركة\n• مقدمي الخدمة الذين يقدمون زيارات منزلية\n• ساعات العمل والمواقع\n\nفقط اسألني عما تحتاجه!",
}

THANKS = {
    "en": "You're welcome! Is there anything else I can help you with?",
    "fr": "De rien ! Y a-t-il autre chose que je puisse faire pour vous ?",
    "ar": "على الرحب والسعة! هل هناك أي شيء آخر يمكنني مساعدتك به؟",
}

EMERGENCY_FOUND = {
    "en": "I found {count} emergency healthcare providers available 24/7:",
    "fr": "J'ai trouvé {count} prestataires de soins d'urgence disponibles 24h/24 et 7j/7 :",
    "ar": "وجدت {count} من مقدمي الرعاية الصحية الطارئة المتاحين على مدار الساعة:",
}

PROVIDERS_FOUND = {
    "en": "I found {count} healthcare providers for you:",
    "fr": "J'ai trouvé {count} prestataires de soins de santé pour vous :",
    "ar": "وجدت {count} من مقدمي الرعاية الصحية لك:",
}

NO_PROVIDERS = {
    "en": "I couldn't find any providers matching your request. Try searching for doctors, clinics, hospitals, pharmacies, or labs.",
    "fr": "Je n'ai trouvé aucun prestataire correspondant à votre demande. Essayez de rechercher des médecins, des cliniques, des hôpitaux, des pharmacies ou des laboratoires.",
    "ar": "لم أتمكن من العثور على أي مقدمي خدمة يطابقون طلبك. حاول البحث عن الأطباء أو العيادات أو المستشفيات أو الصيدليات أو المختبرات.",
}

HOURS = {
    "en": "To see operating hours for a specific provider, please search for them and view their profile. You can also filter for 24/7 emergency services if you need immediate care.",
    "fr": "Pour voir les heures d'ouverture d'un prestataire spécifique, veuillez le rechercher et consulter son profil. Vous pouvez également filtrer les services d'urgence 24h/24 et 7j/7 si vous avez besoin de soins immédiats.",
    "ar": "لمعرفة ساعات العمل لمقدم خدمة معين، يرجى البحث عنه وعرض ملفه الشخصي. يمكنك أيضًا تصفية خدمات الطوارئ على مدار الساعة إذا كنت بحاجة إلى رعاية فورية.",
}

LOCATION = {
    "en": "To see the location and get directions to a provider, please search for them and view their profile. Each profile includes an interactive map showing their exact location.",
    "fr": "Pour voir l'emplacement et obtenir des directions vers un prestataire, veuillez le rechercher et consulter son profil. Chaque profil comprend une carte interactive montrant leur emplacement exact.",
    "ar": "لمعرفة الموقع والحصول على الاتجاهات إلى مقدم الخدمة، يرجى البحث عنه وعرض ملفه الشخصي. يتضمن كل ملف شخصي خريطة تفاعلية توضح موقعه الدقيق.",
}

LOCATION_FOUND = {
    "en": "Here are {count} providers; open a profile to see its map and directions:",
    "fr": "Voici {count} prestataires ; ouvrez un profil pour voir sa carte et l'itinéraire :",
    "ar": "إليك {count} من مقدمي الخدمة؛ افتح الملف الشخصي لرؤية الخريطة والاتجاهات:",
}

ACCESSIBLE_FOUND = {
    "en": "I found {count} wheelchair-accessible healthcare providers:",
    "fr": "J'ai trouvé {count} prestataires de soins de santé accessibles en fauteuil roulant :",
    "ar": "وجدت {count} من مقدمي الرعاية الصحية الذين يمكن الوصول إليهم بالكراسي المتحركة:",
}

HOME_VISIT_FOUND = {
    "en": "I found {count} healthcare providers offering home visits:",
    "fr": "J'ai trouvé {count} prestataires de soins de santé proposant des visites à domicile :",
    "ar": "وجدت {count} من مقدمي الرعاية الصحية الذين يقدمون زيارات منزلية:",
}

UNKNOWN = {
    "en": "I'm not sure I understand. I can help you find healthcare providers, emergency services, or answer questions about accessibility and home visits. What would you like to know?",
    "fr": "Je ne suis pas sûr de comprendre. Je peux vous aider à trouver des prestataires de soins de santé, des services d'urgence ou répondre à des questions sur l'accessibilité et les visites à domicile. Que voudriez-vous savoir ?",
    "ar": "لست متأكدًا من أنني أفهم. يمكنني مساعدتك في العثور على مقدمي الرعاية الصحية أو خدمات الطوارئ أو الإجابة على أسئلة حول إمكانية الوصول والزيارات المنزلية. ماذا تريد أن تعرف؟",
}

APOLOGY = {
    "en": "I'm sorry, I encountered an error. Please try again or use the search function to find providers.",
    "fr": "Je suis désolé, j'ai rencontré une erreur. Veuillez réessayer ou utiliser la fonction de recherche pour trouver des prestataires.",
    "ar": "أنا آسف، واجهت خطأ. يرجى المحاولة مرة أخرى أو استخدام وظيفة البحث للعثور على مقدمي الخدمة.",
}

QUICK_REPLIES = {
    "en": [
        ("Find a doctor", "findDoctor"),
        ("Emergency services", "emergency"),
        ("Wheelchair accessible", "accessibility"),
        ("Home visits", "homeVisit"),
    ],
    "fr": [
        ("Trouver un médecin", "findDoctor"),
        ("Services d'urgence", "emergency"),
        ("Accessible en fauteuil roulant", "accessibility"),
        ("Visites à domicile", "homeVisit"),
    ],
    "ar": [
        ("ابحث عن طبيب", "findDoctor"),
        ("خدمات الطوارئ", "emergency"),
        ("متاح للكراسي المتحركة", "accessibility"),
        ("زيارات منزلية", "homeVisit"),
    ],
}


def localized(table: dict, language: str, **values) -> str:
    text = table.get(language) or table[FALLBACK_LANGUAGE]
    return text.format(**values) if values else text


def quick_replies(language: str) -> list:
    replies = QUICK_REPLIES.get(language) or QUICK_REPLIES[FALLBACK_LANGUAGE]
    return [QuickReply(text=text, action=action) for text, action in replies]


def emergency_reply(language: str) -> list:
    """The single quick reply offered after an opening-hours question."""
    return [reply for reply in quick_replies(language) if reply.action == "emergency"]
