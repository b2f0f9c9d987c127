"""English pluralization rules for resource names.

Handles irregular plurals, uncountable nouns and the common suffix
patterns. Used to derive type names from collection names.
"""

import re

IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "self": "selves",
    "elf": "elves",
    "loaf": "loaves",
    "potato": "potatoes",
    "tomato": "tomatoes",
    "cactus": "cacti",
    "focus": "foci",
    "fungus": "fungi",
    "nucleus": "nuclei",
    "syllabus": "syllabi",
    "analysis": "analyses",
    "diagnosis": "diagnoses",
    "oasis": "oases",
    "thesis": "theses",
    "crisis": "crises",
    "phenomenon": "phenomena",
    "criterion": "criteria",
    "datum": "data",
}

IRREGULAR_SINGULARS: dict[str, str] = {
    plural: singular for singular, plural in IRREGULAR_PLURALS.items()
}

UNCOUNTABLE = frozenset({
    "sheep",
    "fish",
    "deer",
    "species",
    "series",
    "news",
    "money",
    "information",
    "equipment",
    "rice",
    "knowledge",
    "advice",
    "aircraft",
    "salmon",
    "trout",
    "moose",
    "bison",
})

F_TO_VES_WORDS = frozenset({
    "leaf", "life", "knife", "wife", "self", "elf",
    "loaf", "half", "calf", "shelf", "wolf", "thief",
})

O_TO_OES_WORDS = frozenset({"potato", "tomato", "hero", "echo", "torpedo", "veto"})

# Stems (plural minus "es") of the O_TO_OES_WORDS
OES_STEMS = ("potat", "tomat", "her", "ech", "torped", "vet")

# Stems (plural minus "ves") that singularize to "fe" rather than "f"
FE_STEMS = ("li", "wi", "kni")

CONSONANT_Y = re.compile(r"[^aeiou]y$", re.IGNORECASE)
SIBILANT_END = re.compile(r"(?:s|x|z|ch|sh)$", re.IGNORECASE)
F_END = re.compile(r"(?:f|fe)$", re.IGNORECASE)
CONSONANT_O = re.compile(r"[^aeiou]o$", re.IGNORECASE)
SIBILANT_ES_END = re.compile(r"(?:s|x|z|ch|sh)es$", re.IGNORECASE)
PLURAL_END = re.compile(r"(?:ies|es|s)$", re.IGNORECASE)


def preserve_case(original: str, replacement: str) -> str:
    """Apply the case pattern of ``original`` to ``replacement``.

    All-uppercase input gives uppercase output, a leading capital gives
    Titlecase output, anything else gives lowercase output.
    """
    if not original:
        return replacement
    if original == original.upper():
        return replacement.upper()
    if original[0] == original[0].upper():
        return replacement[:1].upper() + replacement[1:].lower()
    return replacement.lower()


def pluralize(word: str) -> str:
    """Pluralize a word using English rules.

    Examples:
        >>> pluralize("Task")
        'Tasks'
        >>> pluralize("Person")
        'People'
        >>> pluralize("category")
        'categories'
        >>> pluralize("sheep")
        'sheep'
    """
    if not word:
        return word

    lower = word.lower()

    if lower in UNCOUNTABLE:
        return word

    if lower in IRREGULAR_PLURALS:
        return preserve_case(word, IRREGULAR_PLURALS[lower])

    if CONSONANT_Y.search(word):
        return word[:-1] + preserve_case(word[-1], "ies")

    if SIBILANT_END.search(word):
        return word + preserve_case(word[-1], "es")

    if F_END.search(word) and lower in F_TO_VES_WORDS:
        if lower.endswith("fe"):
            return word[:-2] + preserve_case(word[-2:], "ves")
        return word[:-1] + preserve_case(word[-1], "ves")

    if CONSONANT_O.search(word) and lower in O_TO_OES_WORDS:
        return word + preserve_case(word[-1], "es")

    return word + preserve_case(word[-1], "s")


def singularize(word: str) -> str:
    """Singularize a word using English rules.

    Examples:
        >>> singularize("Tasks")
        'Task'
        >>> singularize("People")
        'Person'
        >>> singularize("boxes")
        'box'
    """
    if not word:
        return word

    lower = word.lower()

    if lower in UNCOUNTABLE:
        return word

    if lower in IRREGULAR_SINGULARS:
        return preserve_case(word, IRREGULAR_SINGULARS[lower])

    if lower.endswith("ies"):
        return word[:-3] + preserve_case(word[-3:], "y")

    if lower.endswith("ves"):
        base = lower[:-3]
        if base.endswith(FE_STEMS):
            return word[:-3] + preserve_case(word[-3:], "fe")
        return word[:-3] + preserve_case(word[-3:], "f")

    if SIBILANT_ES_END.search(word):
        return word[:-2]

    if lower.endswith("oes") and lower[:-2].endswith(OES_STEMS):
        return word[:-2]

    if lower.endswith("es") and not lower.endswith("ses"):
        stem = lower[:-2]
        if stem.endswith(("s", "x", "z", "ch", "sh")):
            return word[:-2]
        return word[:-1]

    if len(word) > 1 and lower.endswith("s") and not lower.endswith("ss"):
        return word[:-1]

    return word


def is_plural(word: str) -> bool:
    """Check whether a word looks plural.

    Uncountable nouns are treated as singular.
    """
    lower = word.lower()

    if lower in UNCOUNTABLE:
        return False

    if lower in IRREGULAR_SINGULARS:
        return True

    return bool(PLURAL_END.search(word)) and lower not in IRREGULAR_PLURALS
