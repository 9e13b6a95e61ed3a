"""Errors raised while compiling intents."""

from __future__ import annotations


class IntentCompilationError(ValueError):
    """Base class for intent compilation failures."""

    pass


class PreconditionViolation(IntentCompilationError):
    """Raised when an intent definition is missing required data.

    The whole intent is rejected; no partial output is produced.

    Attributes:
        intent_name: Name of the offending intent, if it has one.
        sentence: Training sentence being compiled, if any.
        fragment: Text fragment being resolved, if any.
    """

    def __init__(
        self,
        message: str,
        intent_name: str | None = None,
        sentence: str | None = None,
        fragment: str | None = None,
    ) -> None:
        self.intent_name = intent_name
        self.sentence = sentence
        self.fragment = fragment

        context = [f"intent={intent_name!r}"]
        if sentence is not None:
            context.append(f"sentence={sentence!r}")
        if fragment is not None:
            context.append(f"fragment={fragment!r}")
        super().__init__(f"{message} ({', '.join(context)})")
