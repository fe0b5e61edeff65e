"""Detection rules for forensic scene elements.

Each rule maps keyword synonyms to an element category, a display color
and an icon tag. Rule order is emission order.
"""

from dataclasses import dataclass

from scene_mapper.models.scene import SceneCategory

DEFAULT_ICON = "pin"
DEFAULT_SIZE = 16

CUSTOM_COLOR = "#6366f1"
CUSTOM_ICON = "box"
CUSTOM_CLASSIFICATION = "Supplementary evidence"


@dataclass(frozen=True)
class PatternRule:
    """A detection rule for one element category."""
    category: SceneCategory
    synonyms: frozenset[str]
    color: str
    icon: str
    size: int = DEFAULT_SIZE          # Marker radius on the reference canvas
    classification: str = ""

    def matches(self, normalized_text: str) -> bool:
        """Substring match against already lowercased text."""
        return any(synonym in normalized_text for synonym in self.synonyms)


# Ordered catalog; English terms plus the Portuguese vocabulary of field reports
PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        category=SceneCategory.BODY,
        synonyms=frozenset({
            "body", "corpse", "victim", "deceased",
            "corpo", "cadáver", "vítima", "morto",
        }),
        color="#1e90ff",
        icon="user",
        size=20,
        classification="Victim",
    ),
    PatternRule(
        category=SceneCategory.WEAPON,
        synonyms=frozenset({
            "weapon", "handgun", "shotgun", "pistol", "revolver",
            "knife", "machete", "firearm",
            "arma", "pistola", "revólver", "faca", "facão",
        }),
        color="#dc143c",
        icon="zap",
        size=16,
        classification="Primary evidence",
    ),
    PatternRule(
        category=SceneCategory.BLOOD,
        synonyms=frozenset({
            "blood",
            "sangue", "mancha", "poça",
        }),
        color="#8b0000",
        icon="droplet",
        size=14,
        classification="Biological trace",
    ),
    PatternRule(
        category=SceneCategory.FOOTPRINT,
        synonyms=frozenset({
            "footprint", "footstep", "shoe print", "shoeprint",
            "pegada", "pisada", "rastro",
        }),
        color="#8b4513",
        icon="footprints",
        size=12,
        classification="Trace evidence",
    ),
    PatternRule(
        category=SceneCategory.ACCESS_POINT,
        synonyms=frozenset({
            "door", "window", "entrance",
            "porta", "janela", "entrada",
        }),
        color="#4a5568",
        icon="door",
        size=18,
        classification="Point of entry",
    ),
    PatternRule(
        category=SceneCategory.FURNITURE,
        synonyms=frozenset({
            "table", "chair", "sofa", "couch", "furniture",
            "mesa", "cadeira", "sofá", "móvel", "mobília", "mobilia",
        }),
        color="#2d3748",
        icon="box",
        size=16,
        classification="Environment",
    ),
    PatternRule(
        category=SceneCategory.ROOM,
        synonyms=frozenset({
            "kitchen", "bathroom", "bedroom", "living room",
            "cozinha", "banheiro", "quarto", "sala",
        }),
        color="#4a5568",
        icon="home",
        size=22,
        classification="Environment",
    ),
)


def normalize_text(text: str) -> str:
    """Lowercase text for case-insensitive matching."""
    return text.lower()


def match_rules(text: str) -> list[PatternRule]:
    """Get every rule with at least one synonym in the text, in catalog order."""
    normalized = normalize_text(text)
    return [rule for rule in PATTERN_RULES if rule.matches(normalized)]


def get_rule_for_category(category: SceneCategory | str) -> PatternRule | None:
    """Get the rule for a category, or None for custom/unknown categories."""
    try:
        category = SceneCategory(category)
    except ValueError:
        return None
    for rule in PATTERN_RULES:
        if rule.category == category:
            return rule
    return None


def get_icon_for_category(category: SceneCategory | str) -> str:
    rule = get_rule_for_category(category)
    return rule.icon if rule else DEFAULT_ICON


def get_size_for_category(category: SceneCategory | str) -> int:
    rule = get_rule_for_category(category)
    return rule.size if rule else DEFAULT_SIZE


def get_catalog_categories() -> list[SceneCategory]:
    """Categories covered by the catalog, in emission order."""
    return [rule.category for rule in PATTERN_RULES]
