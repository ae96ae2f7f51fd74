# guardiao/services/actor.py
"""
Identity of the operator performing an action. Passed explicitly into every
service call that writes to the store or moves an occurrence.
"""

from dataclasses import dataclass

from guardiao.constants import AccessLevel


@dataclass(frozen=True)
class Actor:
    id: str
    name: str
    is_admin: bool = False
    access_level: AccessLevel = AccessLevel.N1

    @property
    def is_command(self) -> bool:
        return self.access_level == AccessLevel.OM
