"""Prompt texts served by the tutor."""

from .system import get_prompts as get_system_prompts

# Sections joined, in order, into the tutor's system prompt.
TUTOR_SECTIONS = ("base", "terminal-notes")


def get_all_prompts() -> dict[str, str]:
    """Every named prompt section plus the assembled `tutor-system-prompt`."""
    sections = get_system_prompts()
    return {
        **sections,
        "tutor-system-prompt": "".join(sections[name] for name in TUTOR_SECTIONS),
    }
