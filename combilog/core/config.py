"""
Default budgets shared by every potentially nonterminating operation.

Functions that take max_steps / max_args / terse accept None to mean
"use the value in DEFAULTS". The record is read-mostly; the CLI is the
only regular writer.
"""

from dataclasses import dataclass, fields


@dataclass
class Defaults:
    terse: bool = True      # renderer: omit redundant separators
    max_steps: int = 1000   # reduction steps per run()
    max_args: int = 32      # probes tried by canonicalize()


DEFAULTS = Defaults()


def configure(**overrides) -> Defaults:
    """Update DEFAULTS in place. Unknown keys are an error, None is ignored."""
    known = {f.name for f in fields(Defaults)}
    for key, value in overrides.items():
        if key not in known:
            raise TypeError(f"unknown option: {key}")
        if value is not None:
            setattr(DEFAULTS, key, value)
    return DEFAULTS
