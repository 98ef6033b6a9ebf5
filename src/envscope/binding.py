"""Declarative property binding.

Injection frameworks discover targets however they like; the lookup itself
is always ``resolve_binding``. ``bind_properties`` is a minimal binder for
plain classes:

    class Mailer:
        host = Property("mail.host")
        port = Property("mail.port", default="25")
        sender = Property()           # looks up "sender"

    mailer = bind_properties(env, Mailer())
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypeVar

from envscope.environment import MISSING, Environment

T = TypeVar("T")


@dataclass(frozen=True)
class Property:
    """Marks an attribute to be filled from the environment.

    Attributes:
        key: Property key; the attribute name is used when omitted
        default: Value used when the key is undefined; without one a
            missing key raises ``MissingKeyError``
    """

    key: Optional[str] = None
    default: Any = MISSING

    @property
    def required(self) -> bool:
        return self.default is MISSING


def resolve_binding(
    environment: Environment,
    target_name: str,
    key: Optional[str] = None,
    default: Any = MISSING,
) -> Any:
    """Resolve the value for one binding target.

    Looks up ``key`` or, when it is not given, ``target_name``. Without a
    default this is ``Environment.get``; with one it is ``get_or_default``.

    Raises:
        MissingKeyError: If the key is undefined and no default was given
    """
    lookup = key or target_name
    if default is MISSING:
        return environment.get(lookup)
    return environment.get_or_default(lookup, default)


def collect_properties(cls: type) -> Dict[str, Property]:
    """``Property`` markers declared on ``cls`` and its bases, by attribute name."""
    found: Dict[str, Property] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, Property):
                found[name] = value
    return found


def bind_properties(environment: Environment, target: T) -> T:
    """Assign every ``Property`` declared on ``type(target)`` onto ``target``.

    All values are resolved before any is assigned, so a missing key leaves
    ``target`` untouched.

    Returns:
        ``target``, for chaining
    """
    values = {
        name: resolve_binding(environment, name, marker.key, marker.default)
        for name, marker in collect_properties(type(target)).items()
    }
    for name, value in values.items():
        setattr(target, name, value)
    return target


__all__ = ["Property", "resolve_binding", "collect_properties", "bind_properties"]
