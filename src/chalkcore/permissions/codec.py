"""Conversion between symbolic permission strings and integer bitmasks.

A symbolic string is a run of action codes (``"rc"``); its bitmask is the sum
of their flags. Encoding walks the flag table from the largest flag down and
peels each flag off greedily. Because every flag is a distinct power of two
this is exact bit extraction: any remainder left at the end means the mask
carries bits outside the table, and encoding fails instead of dropping them.
"""

from __future__ import annotations

from ..config import AuthorizationConfig
from ..exceptions import NonRepresentableBitmaskError, UnknownActionError


class PermissionCodec:
    """Bidirectional symbolic ↔ bitmask codec.

    The flag table is read from ``config`` on every call, so a config shared
    with other components is always seen in its current state.

    Example::

        codec = PermissionCodec(AuthorizationConfig())
        codec.decode("rc")   # 3
        codec.decode("ccr")  # 3 (duplicates ignored)
        codec.encode(3)      # "rc"
        codec.encode(16)     # NonRepresentableBitmaskError
    """

    __slots__ = ("_config",)

    def __init__(self, config: AuthorizationConfig) -> None:
        self._config = config

    @property
    def permission_map(self) -> dict[str, int]:
        return self._config.permission_map

    def sum_of_all_flags(self) -> int:
        return sum(self.permission_map.values())

    def decode(self, symbolic: str) -> int:
        """Convert a symbolic permission string into a bitmask.

        Raises:
            UnknownActionError: A character has no entry in the flag table.
        """
        permission_map = self.permission_map
        total = 0
        for action in dict.fromkeys(symbolic):
            try:
                total += permission_map[action]
            except KeyError:
                raise UnknownActionError(
                    f"Unknown action code {action!r} in {symbolic!r}",
                    action=action,
                ) from None
        return total

    def encode(self, bitmask: int) -> str:
        """Convert a bitmask into its canonical symbolic string.

        Action codes appear in descending flag order; 0 encodes to ``""``.

        Raises:
            NonRepresentableBitmaskError: The mask is negative or has bits
                no configured flag covers.
        """
        permission_map = self.permission_map
        rest = bitmask
        collected: list[str] = []
        for action in sorted(permission_map, key=permission_map.__getitem__, reverse=True):
            flag = permission_map[action]
            if rest >= flag:
                rest -= flag
                collected.append(action)
        if rest != 0:
            raise NonRepresentableBitmaskError(
                f"Bitmask {bitmask} cannot be represented with flags {sorted(permission_map.values())}",
                bitmask=bitmask,
                remainder=rest,
            )
        return "".join(collected)


__all__ = ["PermissionCodec"]
