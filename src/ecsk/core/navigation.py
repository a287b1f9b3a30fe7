"""Selection prompts shared by every wizard step."""

from __future__ import annotations

import questionary
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPress, KeyPressEvent
from prompt_toolkit.keys import Keys

from .errors import WizardCancelled

BACK = "navigation:back"
EXIT = "navigation:exit"


def get_questionary_style() -> questionary.Style:
    """Consistent questionary styling across all prompts."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan"),
            ("selected", "fg:green"),
        ]
    )


def add_navigation_choices_with_shortcuts(choices: list[dict[str, str]], back_text: str | None) -> list:
    """Add navigation choices with shortcut keys to existing choices list."""
    nav_choices = [questionary.Choice(choice["name"], choice["value"]) for choice in choices]

    # Back is only offered when the step has a predecessor
    if back_text:
        nav_choices.append(questionary.Choice(f"⬅️ {back_text} (b)", BACK, shortcut_key="b"))

    nav_choices.append(questionary.Choice("❌ Exit (q)", EXIT, shortcut_key="q"))

    return nav_choices


def _bind_escape_to_back(question: questionary.Question) -> None:
    """Make ESC behave like pressing 'b' and Enter."""
    if not hasattr(question, "application"):
        return

    custom_bindings = KeyBindings()

    @custom_bindings.add(Keys.Escape, eager=True)
    def _(event: KeyPressEvent) -> None:
        event.app.key_processor.feed(KeyPress("b", ""))
        event.app.key_processor.feed(KeyPress(Keys.ControlM, ""))

    existing = getattr(question.application, "key_bindings", None)
    if existing:
        merged_bindings = KeyBindings()
        for binding in existing.bindings:
            merged_bindings.bindings.append(binding)
        for binding in custom_bindings.bindings:
            merged_bindings.bindings.append(binding)
        question.application.key_bindings = merged_bindings


def select_one(prompt: str, choices: list[dict[str, str]], back_text: str | None) -> str:
    """Single selection. Returns "" when back was chosen.

    Raises WizardCancelled on exit or Ctrl-C.
    """
    nav_choices = add_navigation_choices_with_shortcuts(choices, back_text)
    # questionary only supports shortcuts for up to 36 choices
    use_shortcuts = len(nav_choices) <= 36
    question = questionary.select(
        prompt, choices=nav_choices, style=get_questionary_style(), use_shortcuts=use_shortcuts
    )
    if back_text and use_shortcuts:
        _bind_escape_to_back(question)

    selected = question.ask()
    if selected is None or selected == EXIT:
        raise WizardCancelled()
    if selected == BACK:
        return ""
    return selected


def select_many(prompt: str, choices: list[dict[str, str]]) -> list[str]:
    """Multi selection. An empty selection means back.

    Raises WizardCancelled on Ctrl-C.
    """
    question = questionary.checkbox(
        prompt,
        choices=[questionary.Choice(choice["name"], choice["value"]) for choice in choices],
        style=get_questionary_style(),
        instruction="(space to toggle, enter to confirm, nothing selected goes back)",
    )
    selected = question.ask()
    if selected is None:
        raise WizardCancelled()
    return list(selected)


def ask_text(prompt: str) -> str:
    answer = questionary.text(prompt, style=get_questionary_style()).ask()
    if answer is None:
        raise WizardCancelled()
    return answer.strip()
