"""Display metadata for each voice archetype."""
from dataclasses import dataclass
from typing import Dict, List

from .types import Archetype, ArchetypeLike


@dataclass(frozen=True)
class ArchetypeProfile:
    """What a listener is told about their voice type."""
    archetype: Archetype
    name: str
    icon: str
    description: str
    strengths: List[str]
    best_for: List[str]
    tips: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.archetype.value,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "strengths": list(self.strengths),
            "best_for": list(self.best_for),
            "tips": self.tips,
        }


PROFILES: Dict[Archetype, ArchetypeProfile] = {
    Archetype.STORYTELLER: ArchetypeProfile(
        archetype=Archetype.STORYTELLER,
        name="The Storyteller",
        icon="📚",
        description=(
            "Your voice has a warm, engaging quality that draws listeners in. "
            "You have natural pacing and a conversational tone that makes "
            "people want to keep listening."
        ),
        strengths=["Warm tone", "Natural pacing", "Engaging delivery", "Emotional connection"],
        best_for=["Audiobook Narration", "Podcast Hosting", "Children's Stories", "Memoir Reading"],
        tips=(
            "Focus on audiobook narration and long-form content. Your natural "
            "storytelling ability shines in fiction and non-fiction alike."
        ),
    ),
    Archetype.AUTHORITY: ArchetypeProfile(
        archetype=Archetype.AUTHORITY,
        name="The Authority",
        icon="🎯",
        description=(
            "You have a commanding presence and gravitas that demands attention. "
            "Your voice carries weight and credibility, perfect for serious content."
        ),
        strengths=["Deep resonance", "Measured pace", "Authoritative tone", "Clear articulation"],
        best_for=["Documentary Narration", "Corporate Training", "News Reading", "Political Content"],
        tips=(
            "Pursue documentary work and corporate narration. Your voice adds "
            "credibility to serious, informative content."
        ),
    ),
    Archetype.ENERGIZER: ArchetypeProfile(
        archetype=Archetype.ENERGIZER,
        name="The Energizer",
        icon="⚡",
        description=(
            "Your voice is bright, dynamic, and full of energy! You bring excitement "
            "and enthusiasm that's perfect for upbeat content."
        ),
        strengths=["High energy", "Fast-paced", "Expressive", "Enthusiastic delivery"],
        best_for=["Radio Commercials", "Product Ads", "Gaming Content", "Social Media Videos"],
        tips=(
            "Commercial voice work is your sweet spot. Practice 15-30 second spots "
            "and build your demo reel with energetic reads."
        ),
    ),
    Archetype.EDUCATOR: ArchetypeProfile(
        archetype=Archetype.EDUCATOR,
        name="The Educator",
        icon="🎓",
        description=(
            "You have a clear, patient, and approachable voice that helps people "
            "learn. Your measured delivery makes complex topics feel accessible."
        ),
        strengths=["Clear articulation", "Patient pacing", "Approachable tone", "Consistent delivery"],
        best_for=["E-Learning Courses", "Tutorial Videos", "Educational Content", "Training Materials"],
        tips=(
            "E-learning is booming and needs voices like yours. Course platforms "
            "need quality narration."
        ),
    ),
    Archetype.VERSATILE: ArchetypeProfile(
        archetype=Archetype.VERSATILE,
        name="The Versatile Pro",
        icon="🎭",
        description=(
            "You're the Swiss Army knife of voice acting! Your balanced vocal "
            "qualities allow you to adapt to almost any style or genre."
        ),
        strengths=["Adaptable range", "Balanced tone", "Good control", "Multi-genre capability"],
        best_for=["Character Work", "Multiple Roles", "Diverse Projects", "Any Genre"],
        tips=(
            "Your versatility is your superpower. Build a diverse demo reel showcasing "
            "different styles: commercial, narration, character work."
        ),
    ),
    Archetype.CHARACTER: ArchetypeProfile(
        archetype=Archetype.CHARACTER,
        name="The Character Artist",
        icon="🎪",
        description=(
            "You have exceptional dynamic range and expressiveness! Your voice can "
            "transform into different characters and emotions with ease."
        ),
        strengths=["Wide dynamic range", "Expressive", "Character variety", "Emotional depth"],
        best_for=["Animation", "Video Games", "Character Voices", "Dramatic Readings"],
        tips=(
            "Animation and gaming need your skills. Create a character demo reel "
            "showing your range: hero, villain, creature, comic relief."
        ),
    ),
}


def get_profile(archetype: ArchetypeLike) -> ArchetypeProfile:
    """Look up display metadata by Archetype or label.

    Raises:
        ValueError: for an unknown label
    """
    if not isinstance(archetype, Archetype):
        archetype = Archetype(str(archetype).strip().lower())
    return PROFILES[archetype]
