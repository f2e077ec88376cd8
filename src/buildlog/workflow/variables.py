"""
Build variable merging and redaction.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from buildlog.events.base import EnvironmentProvider

logger = logging.getLogger(__name__)


def _as_strings(variables: Optional[Mapping]) -> dict[str, str]:
    """Copy a mapping with keys and values as strings (None becomes "")."""
    return {str(k): "" if v is None else str(v) for k, v in (variables or {}).items()}


def merge_build_variables(
    build_variables: Optional[Mapping[str, str]],
    environments: Optional[Iterable[Optional[EnvironmentProvider]]],
    sensitive_keys: Optional[Iterable[str]],
) -> dict[str, str]:
    """
    Merge a build's variables with its environment contributions.

    Starts from a copy of the build's own variables, then applies each
    provider in order (later providers win on collisions). Null providers
    are skipped, as are providers that fail to contribute. Sensitive keys
    are removed last, so a provider cannot reintroduce one. Keys and values
    are coerced to strings.

    Args:
        build_variables: The build's own variables
        environments: Environment providers in declaration order
        sensitive_keys: Keys whose entries must not leave the build

    Returns:
        New dict of merged, redacted variables
    """
    merged = _as_strings(build_variables)

    for index, env in enumerate(environments or ()):
        if env is None:
            continue
        try:
            contributed = _as_strings(env.build_env_vars())
        except Exception:
            logger.warning(
                f"Skipping environment provider #{index} ({type(env).__name__})",
                exc_info=True,
            )
            continue
        if contributed:
            merged.update(contributed)

    redacted = [key for key in (sensitive_keys or ()) if merged.pop(str(key), None) is not None]
    if redacted:
        logger.debug(f"Redacted {len(redacted)} sensitive variable(s)")

    return merged
