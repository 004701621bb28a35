"""Registry exception types.

Convention:
- ``ValidationError``: the content set violates a structural invariant
  (duplicate path or alias, alias/path collision, unresolved, ambiguous or
  cyclic menu parent). Raised while building a registry or a navigation tree;
  carries every problem found so callers can report them all at once.
- ``NotFoundError``: a path or alias does not name any page. Local to the
  query that raised it.

Broken cross-references are not errors: ``DocumentRegistry.validate_links``
returns them as data.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for document registry errors."""


class ValidationError(RegistryError):
    """Raised when a content set fails structural validation.

    No registry is ever exposed after this is raised; the whole batch is
    rejected.
    """

    def __init__(self, problems: list[str] | str) -> None:
        if isinstance(problems, str):
            problems = [problems]
        self.problems: list[str] = list(problems)
        if len(self.problems) == 1:
            message = self.problems[0]
        else:
            message = f"{len(self.problems)} validation problems: " + "; ".join(self.problems)
        super().__init__(message)


class NotFoundError(RegistryError):
    """Raised when a path or alias does not resolve to any page."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No page found for {path!r}")
