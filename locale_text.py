"""Fixed user-facing strings for the supported locales."""

from __future__ import annotations

import re
from typing import Dict

SUPPORTED_LOCALES = ("fr", "en")
FALLBACK_LOCALE = "fr"

LANGUAGE_NAMES = {"fr": "Français", "en": "English"}

LANGUAGE_INSTRUCTIONS = {
    "en": "=my language is English, let's keep this conversation completely in English=",
    "fr": "=ma langue est le français, gardons cette conversation entièrement en français=",
}

_LANGUAGE_INSTRUCTION_RE = re.compile(
    r"\s*(?:" + "|".join(re.escape(value) for value in LANGUAGE_INSTRUCTIONS.values()) + r")\s*"
)

TEXT: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Brief Assistant",
        "greeting": "Hi! I'll help you write a clear project brief in a few minutes.",
        "template_question": "Which storytelling template would you like to use?",
        "template.basic": "Basic storytelling",
        "template.emotional": "Emotional storytelling",
        "lets_start": "Let's start with the {template} template",
        "input_placeholder": "Type a message...",
        "thinking": "Thinking...",
        "send": "Send",
        "quick_answers": "Quick answers",
        "help.examples": "Give me examples",
        "help.skip": "Skip this question",
        "voice_message": "🎙️ Voice message",
        "audio.uploading": "Uploading...",
        "audio.uploaded": "Uploaded",
        "audio.error": "Upload failed",
        "error.chat": "❌ Error processing your message.",
        "error.audio": "I couldn't process your audio, could you write it instead?",
        "error.export": "The PDF could not be generated. Please try again.",
        "pdf.title": "Project brief",
        "pdf.footer": "Generated with Brief Assistant",
        "pdf.generated_on": "Generated on {date}",
        "pdf.date_format": "%m/%d/%Y",
        "pdf.page": "Page {current} of {total}",
        "pdf.download": "Download the PDF",
        "pdf.no_content": "There is no brief to export yet.",
    },
    "fr": {
        "title": "Assistant Brief",
        "greeting": "Bonjour ! Je vais vous aider à rédiger un brief projet clair en quelques minutes.",
        "template_question": "Quel modèle de storytelling souhaitez-vous utiliser ?",
        "template.basic": "Storytelling basique",
        "template.emotional": "Storytelling émotionnel",
        "lets_start": "Commençons avec le modèle {template}",
        "input_placeholder": "Écrivez un message...",
        "thinking": "Réflexion...",
        "send": "Envoyer",
        "quick_answers": "Réponses rapides",
        "help.examples": "Donnez-moi des exemples",
        "help.skip": "Sauter cette question",
        "voice_message": "🎙️ Message vocal",
        "audio.uploading": "Envoi...",
        "audio.uploaded": "Envoyé",
        "audio.error": "Échec de l'envoi",
        "error.chat": "❌ Erreur lors du traitement de votre message.",
        "error.audio": "Je n'ai pas pu traiter votre audio, pourriez-vous l'écrire ?",
        "error.export": "Le PDF n'a pas pu être généré. Veuillez réessayer.",
        "pdf.title": "Brief projet",
        "pdf.footer": "Généré avec Assistant Brief",
        "pdf.generated_on": "Généré le {date}",
        "pdf.date_format": "%d/%m/%Y",
        "pdf.page": "Page {current} sur {total}",
        "pdf.download": "Télécharger le PDF",
        "pdf.no_content": "Aucun brief à exporter pour le moment.",
    },
}

TEMPLATES = (
    ("basic-storytelling", "template.basic"),
    ("emotional-storytelling", "template.emotional"),
)


def normalize_locale(locale: str | None) -> str:
    cleaned = (locale or "").strip().lower()[:2]
    return cleaned if cleaned in SUPPORTED_LOCALES else FALLBACK_LOCALE


def t(key: str, locale: str | None = None, **values: object) -> str:
    """Look up ``key`` for ``locale``, falling back to French then the key."""

    table = TEXT[normalize_locale(locale)]
    template = table.get(key) or TEXT[FALLBACK_LOCALE].get(key) or key
    return template.format(**values) if values else template


def strip_language_instruction(text: str) -> str:
    """Hide the ``=my language is ...=`` hint the first message carries."""

    return _LANGUAGE_INSTRUCTION_RE.sub(" ", text or "").strip()


def help_prompts(locale: str | None) -> list[str]:
    return [t("help.examples", locale), t("help.skip", locale)]
