# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: AI generated content with a guaranteed static fallback.
# ============================================================================
"""Content Service.

Wraps the text generator with a timeout. Whenever generation fails, times
out or returns nothing, a fixed message in the subject's language is used
so subjects never see an empty or broken message.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.value_objects.language import Language
from ...domain.value_objects.pregnancy_state import PregnancyState

if TYPE_CHECKING:
    from ..ports import ITextGenerator

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    Language.EN: "English",
    Language.FR: "French",
    Language.RW: "Kinyarwanda",
}

# Static tips by language and trimester, `{week}` is substituted
FALLBACK_TIPS: dict[Language, dict[int, str]] = {
    Language.EN: {
        1: "Week {week}: Take folic acid daily and avoid alcohol. Your baby's organs are forming! Stay hydrated.",
        2: "Week {week}: Gentle exercise like walking is great. Eat calcium-rich foods for your baby's bones.",
        3: "Week {week}: Prepare your hospital bag and learn the signs of labor. Rest when you can!",
    },
    Language.FR: {
        1: "Semaine {week}: Prenez de l'acide folique chaque jour et évitez l'alcool. Buvez beaucoup d'eau.",
        2: "Semaine {week}: Une marche douce est idéale. Mangez des aliments riches en calcium pour le bébé.",
        3: "Semaine {week}: Préparez votre sac pour la maternité et apprenez les signes du travail. Reposez-vous!",
    },
    Language.RW: {
        1: "Icyumweru {week}: Fata folic acid buri munsi kandi wirinde inzoga. Nywa amazi ahagije.",
        2: "Icyumweru {week}: Kugenda gahoro ni byiza. Rya ibiryo bikungahaye kuri calcium ku magufwa y'umwana.",
        3: "Icyumweru {week}: Tegura igikapu cyo kujyana kwa muganga kandi umenye ibimenyetso byo kubyara. Ruhuka!",
    },
}

GENERIC_FALLBACK: dict[Language, str] = {
    Language.EN: "Take care of yourself today: eat well, drink water and keep your health visits.",
    Language.FR: "Prenez soin de vous aujourd'hui: mangez bien, buvez de l'eau et allez à vos visites.",
    Language.RW: "Wiyiteho uyu munsi: rya neza, nywa amazi kandi ujye kwa muganga igihe cyagenwe.",
}

DAILY_TIP_PROMPT = (
    "You are a maternal health assistant. Write one short, practical pregnancy tip "
    "(maximum 150 characters) for a woman in week {week} of pregnancy (trimester {trimester}). "
    "Answer only in {language_name}, without greetings or lists."
)


@dataclass(frozen=True)
class GeneratedContent:
    text: str
    is_fallback: bool = False


def fallback_tip(language: Language, trimester: int | None, week: int | None) -> str:
    """Static tip for the language and trimester."""
    if trimester is None or week is None:
        return GENERIC_FALLBACK.get(language, GENERIC_FALLBACK[Language.EN])
    tips = FALLBACK_TIPS.get(language, FALLBACK_TIPS[Language.EN])
    return tips.get(trimester, tips[1]).replace("{week}", str(week))


class ContentService:
    """Generated content that always resolves to usable text."""

    def __init__(self, generator: "ITextGenerator | None" = None, timeout_seconds: float = 30.0):
        """Initialize content service.

        Args:
            generator: Text generator, None to always use the static content.
            timeout_seconds: Upper bound for a single generation.
        """
        self._generator = generator
        self._timeout = timeout_seconds

    async def generate(self, prompt: str, language: Language, fallback: str) -> GeneratedContent:
        """Generate text, substituting `fallback` on any failure.

        Args:
            prompt: Prompt passed to the generator.
            language: Language requested from the generator.
            fallback: Text used when generation is unavailable.

        Returns:
            GeneratedContent flagged with whether the fallback was used.
        """
        if self._generator is None:
            return GeneratedContent(text=fallback, is_fallback=True)

        try:
            text = await asyncio.wait_for(self._generator.generate(prompt, language.value), timeout=self._timeout)
        except TimeoutError:
            logger.warning(f"Content generation timed out after {self._timeout}s, using fallback")
            return GeneratedContent(text=fallback, is_fallback=True)
        except Exception as e:
            logger.warning(f"Content generation failed, using fallback: {e}")
            return GeneratedContent(text=fallback, is_fallback=True)

        text = (text or "").strip()
        if not text:
            logger.warning("Content generation returned empty text, using fallback")
            return GeneratedContent(text=fallback, is_fallback=True)
        return GeneratedContent(text=text)

    async def daily_tip(self, state: PregnancyState, language: Language) -> GeneratedContent:
        """Daily tip for the subject's current week."""
        fallback = fallback_tip(language, state.trimester, state.gestational_weeks)
        if not state.is_valid:
            return GeneratedContent(text=fallback, is_fallback=True)

        prompt = DAILY_TIP_PROMPT.format(
            week=state.gestational_weeks,
            trimester=state.trimester,
            language_name=LANGUAGE_NAMES.get(language, "English"),
        )
        return await self.generate(prompt, language, fallback)
