"""Result type for explicit soft-failure reporting"""
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar('T')
U = TypeVar('U')


@dataclass
class Result(Generic[T]):
    """
    A value plus the non-fatal problems met while producing it.

    Hard failures in the pipeline are exceptions (ParameterError and
    friends); input that was dropped without invalidating the call travels
    here as warnings, all the way to the tool-call response metadata.

    Examples:
        flags = parse_modifier_flags(Value.from_json(["cmd", "bogus"]))
        flags.unwrap()    # frozenset({ModifierFlag.COMMAND})
        flags.warnings    # ["unknown modifier flag string 'bogus', ignoring"]

        action = flags.map(lambda parsed: PressKey(key_name="a", flags=parsed))
        action.warnings   # carried over from flags
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.success and self.data is None:
            raise ValueError("Successful result must have data")
        if not self.success and self.error is None:
            raise ValueError("Failed result must have error")

    @classmethod
    def ok(cls, data: T) -> 'Result[T]':
        return cls(success=True, data=data)

    @classmethod
    def err(cls, error: str) -> 'Result[T]':
        return cls(success=False, error=error)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def add_warning(self, warning: str) -> 'Result[T]':
        """Record a dropped input; returns self so calls can be chained."""
        self.warnings.append(warning)
        return self

    def unwrap(self) -> T:
        """
        The data of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Unwrap called on failed result: {self.error}")
        return self.data

    def unwrap_or(self, default: T) -> T:
        return self.data if self.success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """Transform the data of a success; warnings are copied either way."""
        if self.success:
            return Result(success=True, data=func(self.data), warnings=list(self.warnings))
        return Result(success=False, error=self.error, warnings=list(self.warnings))

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        extra = f", warnings={self.warnings}" if self.warnings else ""
        if self.success:
            return f"Result.ok({self.data!r}{extra})"
        return f"Result.err({self.error!r}{extra})"
