"""Change-detection fingerprint over everything that shapes generated actions."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Iterable, List, Mapping

from . import __version__
from .decorators import identify


def public_methods(module: object) -> List[str]:
    """Return the sorted public method names of ``module``'s class."""
    cls = type(module)
    return [name for name in dir(cls) if not name.startswith("_") and callable(getattr(cls, name, None))]


def fingerprint(
    modules: Mapping[str, object],
    raw_modules: Any,
    step_decorators: Iterable[object] = (),
    *,
    version: str = __version__,
) -> str:
    """Digest module surfaces, raw module configuration and decorators.

    ``modules`` is hashed in the order given; the caller's ordering decides
    which module wins an action, so it is part of the fingerprint.
    """
    actions: Dict[str, List[str]] = {name: public_methods(module) for name, module in modules.items()}
    digest = hashlib.sha256()
    digest.update(version.encode("utf-8"))
    digest.update(_serialise(actions).encode("utf-8"))
    digest.update(_serialise(raw_modules).encode("utf-8"))
    digest.update(",".join(identify(item) for item in step_decorators).encode("utf-8"))
    return digest.hexdigest()


def _serialise(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=repr)


__all__ = ["fingerprint", "public_methods"]
