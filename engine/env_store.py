"""Shell environment variable store."""

import re
from typing import Iterator, Optional

from pydantic import BaseModel, Field

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class EnvironmentStore(BaseModel):
    """Mapping of shell variable name to value.

    Read by ``echo`` expansion, ``env``, ``whoami`` and ``which``; written by
    ``export`` and by ``cd`` (``PWD``). There is no scoping and no un-export.

    Args:
        variables: Variable name to value, in insertion order.
    """

    variables: dict[str, str] = Field(
        default_factory=dict, description="Variable name to value"
    )

    @classmethod
    def seeded(
        cls,
        home: str,
        user: str,
        path: str,
        extra: Optional[dict[str, str]] = None,
    ) -> "EnvironmentStore":
        """Create a store with ``HOME``, ``USER``, ``PATH`` and ``PWD`` set.

        Args:
            home: Home directory; also the initial ``PWD``.
            user: Login name.
            path: Search path string.
            extra: Additional variables applied after the defaults.

        Returns:
            A new EnvironmentStore.
        """
        store = cls(variables={"HOME": home, "USER": user, "PATH": path, "PWD": home})
        for name, value in (extra or {}).items():
            store.set(name, value)
        return store

    def get(self, name: str) -> Optional[str]:
        return self.variables.get(name)

    def set(self, name: str, value: str) -> None:
        self.variables[name] = value

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self.variables.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self.variables)

    def __contains__(self, name: object) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)


def is_identifier(name: str) -> bool:
    """Return True if ``name`` is a valid shell variable name."""
    return bool(IDENTIFIER_PATTERN.match(name))
