"""
Modifier-Flag Parser

Maps the `modifierFlags` argument (an array of strings) to a set of
ModifierFlag members. A non-string element fails the call; an unknown name
is dropped with a warning so new modifier names never block a key press.
"""

from ..exceptions import ParameterError
from ..models.actions import ModifierFlag
from ..models.enums import ParameterErrorKind
from ..models.result import Result
from ..models.value import Value
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Lower-cased names and abbreviations accepted for each modifier
FLAG_ALIASES: dict[str, ModifierFlag] = {
    "capslock": ModifierFlag.CAPS_LOCK,
    "caps": ModifierFlag.CAPS_LOCK,
    "shift": ModifierFlag.SHIFT,
    "control": ModifierFlag.CONTROL,
    "ctrl": ModifierFlag.CONTROL,
    "option": ModifierFlag.OPTION,
    "opt": ModifierFlag.OPTION,
    "alt": ModifierFlag.OPTION,
    "command": ModifierFlag.COMMAND,
    "cmd": ModifierFlag.COMMAND,
    "help": ModifierFlag.HELP,
    "function": ModifierFlag.FUNCTION,
    "fn": ModifierFlag.FUNCTION,
    "numericpad": ModifierFlag.NUMERIC_PAD,
    "numpad": ModifierFlag.NUMERIC_PAD,
}


def parse_modifier_flags(value: Value | None) -> Result[frozenset[ModifierFlag]]:
    """
    Parse a modifierFlags value.

    Args:
        value: The raw argument; None or any non-array value means "no flags"

    Returns:
        Result holding the flag set, with one warning per ignored name

    Raises:
        ParameterError: WRONG_TYPE if the array contains a non-string element
    """
    items = value.array_value if value is not None else None
    if items is None:
        return Result.ok(frozenset())

    flags: set[ModifierFlag] = set()
    warnings: list[str] = []
    for item in items:
        name = item.string_value
        if name is None:
            raise ParameterError(
                f"Invalid modifierFlags array: contains non-string element {item!r}",
                kind=ParameterErrorKind.WRONG_TYPE,
                field="modifierFlags",
            )
        flag = FLAG_ALIASES.get(name.lower())
        if flag is None:
            logger.warning("unknown_modifier_flag", flag=name)
            warnings.append(f"unknown modifier flag string '{name}', ignoring")
            continue
        flags.add(flag)

    result = Result.ok(frozenset(flags))
    for warning in warnings:
        result.add_warning(warning)
    return result
