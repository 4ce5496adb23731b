"""Variable expansion against an explicit environment."""
import logging
import os
import re
from collections.abc import Mapping
from typing import Dict, Iterator, Optional, Tuple

from .models import Session

logger = logging.getLogger(__name__)

# ${ANYTHING}, a one-character shell special ($1, $$, $?, ...), or $NAME
_REFERENCE = re.compile(r"\$(?:\{([^}]*)\}|([*#$@!?\-0-9])|([A-Za-z_][A-Za-z0-9_]*))")


class Environment(Mapping):
    """An immutable set of environment variables.

    Every expansion and every spawned process reads from an Environment
    passed to it explicitly; ``os.environ`` is only read once, by
    ``from_process``.
    """

    def __init__(self, values: Optional[Mapping] = None):
        self._values: Dict[str, str] = dict(values or {})

    @classmethod
    def from_process(cls) -> "Environment":
        """Snapshot of the current process environment."""
        return cls(os.environ)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Environment({len(self._values)} variables)"

    def expand(self, text: str) -> str:
        """Replace ``$NAME`` and ``${NAME}`` with their values.

        Unset variables expand to the empty string. Shell special names are
        one character long, so ``$1abc`` is ``$1`` followed by ``abc`` and
        ``$$`` or ``$?`` expand like any other unset variable. A ``$`` that
        does not start a reference is kept as is.
        """
        def repl(match: re.Match) -> str:
            name = next(g for g in match.groups() if g is not None)
            return self._values.get(name, "")

        return _REFERENCE.sub(repl, text)

    def with_values(self, values: Mapping) -> "Environment":
        """A new Environment with ``values`` added, verbatim."""
        merged = dict(self._values)
        merged.update(values)
        return Environment(merged)

    def to_dict(self) -> Dict[str, str]:
        """A plain dict, suitable for ``subprocess.run(env=...)``."""
        return dict(self._values)


def resolve_environment(session: Session, base: Environment) -> Tuple[Environment, Dict[str, str]]:
    """Commit the session's environment entries on top of ``base``.

    Entries are committed in document order; each value is expanded against
    everything committed before it, so an entry can reference an earlier
    sibling but a later sibling only resolves to its value in ``base``.

    Returns:
        The extended environment and the expanded entries, in order.
    """
    env = base
    expanded: Dict[str, str] = {}
    for key, raw in session.environment.items():
        value = env.expand(raw)
        expanded[key] = value
        env = env.with_values({key: value})
        logger.debug(f"{key}={value}")
    return env, expanded
