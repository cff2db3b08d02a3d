from __future__ import annotations

"""
Scanner configuration: which rules are enabled and how files are picked up.

The CLI in main.py builds a Config from get_default_config() and overrides
fields from its flags; everything else (scan.py, traversal.py) reads it.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, List, Sequence

from chancheck.rules.base import Rule
from chancheck.rules.channel_send import ChannelSendWithoutSelectRule
from chancheck.rules.unbuffered_channel import UnbufferedChannelRule
from chancheck.traversal import DEFAULT_IGNORE_DIRS


@dataclass
class Config:
    """
    Scanner configuration.

    rules: rules run on every file, in this order.
    ignore_dirs: directory names skipped during discovery.
    include_tests: also analyze *_test.go files.
    fail_fast: stop the scan at the first file that cannot be read or
        parsed; when False the failure is recorded and the scan continues.
    """

    rules: Sequence[Rule] = field(default_factory=list)
    ignore_dirs: AbstractSet[str] = field(default_factory=lambda: set(DEFAULT_IGNORE_DIRS))
    include_tests: bool = True
    fail_fast: bool = True


def get_default_config() -> Config:
    """Return the default configuration with all implemented rules."""
    rules: List[Rule] = [
        ChannelSendWithoutSelectRule(),
        UnbufferedChannelRule(),
    ]
    return Config(rules=rules)


def get_enabled_rules(
    config: Config | None = None,
    disabled: Iterable[str] = (),
) -> Sequence[Rule]:
    """
    Return the rules of config (or the default config) minus disabled ids.

    Raises:
        ValueError: a disabled id does not name any known rule.
    """
    if config is None:
        config = get_default_config()
    disabled = set(disabled)
    known = {rule.id for rule in config.rules}
    unknown = disabled - known
    if unknown:
        raise ValueError(
            f"Unknown rule id(s): {', '.join(sorted(unknown))}; "
            f"known: {', '.join(sorted(known))}"
        )
    return [rule for rule in config.rules if rule.id not in disabled]
