"""Command failures tagged with the run stage that raised them."""

from __future__ import annotations

STAGES = ("config", "input", "calculate", "normalize")


class CommandStageError(RuntimeError):
    """A CLI failure in one of `STAGES`, with an optional fix hint.

    `config` covers settings, option values, and tariff selection; `input`
    covers reading text files or standard input; `calculate` and `normalize`
    cover the core computations of the matching commands.
    """

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        if stage not in STAGES:
            raise ValueError(f"Unknown command stage `{stage}`.")
        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint

    def headline(self, command_name: str) -> str:
        """Return the one-line diagnostic for `command_name`."""

        return f"{command_name} failed at stage `{self.stage}`: {self.detail}"
