"""
Skill catalog and skill-related configuration.

PREDEFINED_SKILLS is the catalog that clients render in their skill
pickers. Skill rows are created from it lazily (the first time a user
references an id) or eagerly via `manage.py seed_skills`.

Import example:
    from skills.constants import PREDEFINED_SKILLS, SKILL_CATALOG
"""

from typing import Final, NamedTuple


class SkillDefinition(NamedTuple):
    id: str
    name: str
    category: str
    icon_name: str


# =============================================================================
# Catalog
# =============================================================================

PREDEFINED_SKILLS: Final[tuple[SkillDefinition, ...]] = (
    # Languages
    SkillDefinition("english", "English", "Languages", "globe"),
    SkillDefinition("spanish", "Spanish", "Languages", "globe"),
    SkillDefinition("french", "French", "Languages", "globe"),
    SkillDefinition("german", "German", "Languages", "globe"),
    SkillDefinition("chinese", "Chinese", "Languages", "globe"),
    SkillDefinition("japanese", "Japanese", "Languages", "globe"),
    # Business
    SkillDefinition("marketing", "Marketing", "Business", "megaphone.fill"),
    SkillDefinition("sales", "Sales", "Business", "chart.line.uptrend.xyaxis"),
    SkillDefinition("management", "Management", "Business", "person.3.fill"),
    SkillDefinition("accounting", "Accounting", "Business", "dollarsign.circle.fill"),
    SkillDefinition("leadership", "Leadership", "Business", "star.fill"),
    SkillDefinition("negotiation", "Negotiation", "Business", "handshake.fill"),
    # Creative
    SkillDefinition("photography", "Photography", "Creative", "camera.fill"),
    SkillDefinition("videography", "Videography", "Creative", "video.fill"),
    SkillDefinition("writing", "Writing", "Creative", "pencil"),
    SkillDefinition("drawing", "Drawing", "Creative", "paintbrush.fill"),
    SkillDefinition("music", "Music", "Creative", "music.note"),
    SkillDefinition("singing", "Singing", "Creative", "mic.fill"),
    # Design
    SkillDefinition("figma", "Figma", "Design", "paintpalette.fill"),
    SkillDefinition("photoshop", "Photoshop", "Design", "photo.fill"),
    SkillDefinition("illustrator", "Illustrator", "Design", "paintbrush.fill"),
    SkillDefinition("uxui", "UX/UI Design", "Design", "slider.horizontal.3"),
    # Sports
    SkillDefinition("yoga", "Yoga", "Sports", "figure.mind.and.body"),
    SkillDefinition("running", "Running", "Sports", "figure.run"),
    SkillDefinition("swimming", "Swimming", "Sports", "figure.pool.swim"),
    SkillDefinition("cycling", "Cycling", "Sports", "bicycle"),
    SkillDefinition("gym", "Gym Training", "Sports", "dumbbell.fill"),
    # Cooking
    SkillDefinition("cooking", "Cooking", "Cooking", "frying.pan.fill"),
    SkillDefinition("baking", "Baking", "Cooking", "birthday.cake.fill"),
    SkillDefinition("barista", "Barista Skills", "Cooking", "cup.and.saucer.fill"),
    # Programming
    SkillDefinition("swift", "Swift", "Programming", "swift"),
    SkillDefinition(
        "python", "Python", "Programming", "chevron.left.forwardslash.chevron.right"
    ),
    SkillDefinition("javascript", "JavaScript", "Programming", "curlybraces"),
    SkillDefinition("webdev", "Web Development", "Programming", "globe"),
    # Communication
    SkillDefinition(
        "public-speaking", "Public Speaking", "Communication", "person.wave.2.fill"
    ),
    SkillDefinition("presentation", "Presentation", "Communication", "rectangle.stack.fill"),
    SkillDefinition("networking", "Networking", "Communication", "person.2.fill"),
)

# id -> definition lookup
SKILL_CATALOG: Final[dict[str, SkillDefinition]] = {
    skill.id: skill for skill in PREDEFINED_SKILLS
}
