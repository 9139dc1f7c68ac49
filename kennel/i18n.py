"""Label catalogs for generated names and pedigree labels."""

from typing import Dict

from kennel.config import SUPPORTED_LOCALES


CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "litter_name": "Litter {dam} x {sire}",
        "unknown_ancestor": "Unknown",
        "ancestor": "Ancestor",
        "role.male.1": "Father",
        "role.male.2": "Grandfather",
        "role.male.3": "Great-grandfather",
        "role.male.4": "Great-great-grandfather",
        "role.male.5": "Great-great-great-grandfather",
        "role.female.1": "Mother",
        "role.female.2": "Grandmother",
        "role.female.3": "Great-grandmother",
        "role.female.4": "Great-great-grandmother",
        "role.female.5": "Great-great-great-grandmother",
        "generation.1": "Parents",
        "generation.2": "Grandparents",
        "generation.3": "Great-grandparents",
        "generation.4": "Great-great-grandparents",
        "generation.5": "Great-great-great-grandparents",
    },
    "pt_BR": {
        "litter_name": "Ninhada {dam} x {sire}",
        "unknown_ancestor": "Desconhecido",
        "ancestor": "Ancestral",
        "role.male.1": "Pai",
        "role.male.2": "Avô",
        "role.male.3": "Bisavô",
        "role.male.4": "Trisavô",
        "role.male.5": "Tetravô",
        "role.female.1": "Mãe",
        "role.female.2": "Avó",
        "role.female.3": "Bisavó",
        "role.female.4": "Trisavó",
        "role.female.5": "Tetravó",
        "generation.1": "Pais",
        "generation.2": "Avós",
        "generation.3": "Bisavós",
        "generation.4": "Trisavós",
        "generation.5": "Tetravós",
    },
}


class Translator:
    """Looks up labels in the catalog for one locale, falling back to English."""

    def __init__(self, locale: str = "en"):
        if locale not in SUPPORTED_LOCALES:
            raise ValueError(f"Unsupported locale: {locale}")
        self.locale = locale
        self._catalog = CATALOGS[locale]

    def gettext(self, key: str, **kwargs: object) -> str:
        template = self._catalog.get(key) or CATALOGS["en"].get(key, key)
        return template.format(**kwargs) if kwargs else template

    def litter_name(self, dam_name: str, sire_name: str) -> str:
        return self.gettext("litter_name", dam=dam_name, sire=sire_name)

    def ancestor_role(self, generation: int, sex: str) -> str:
        key = f"role.{sex}.{generation}"
        if key not in self._catalog:
            return self.gettext("ancestor")
        return self._catalog[key]

    def generation_labels(self, max_generation: int = 5) -> Dict[int, str]:
        return {
            generation: self.gettext(f"generation.{generation}")
            for generation in range(1, max_generation + 1)
        }
