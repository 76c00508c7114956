from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from typing_extensions import TypeAlias, TypeGuard

from .tree import Node

# ---------- Value Model ----------

@dataclass(frozen=True)
class EygNumber:
    value: float

    def __repr__(self) -> str:
        v = float(self.value)
        return str(int(v)) if v.is_integer() else repr(v)

@dataclass(frozen=True)
class EygString:
    value: str

    def __repr__(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

@dataclass(frozen=True)
class EygArray:
    items: Tuple['EygValue', ...] = ()

    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass(frozen=True)
class EygRecord:
    # insertion order is kept for serialization; never mutated after construction
    slots: Dict[str, 'EygValue'] = field(default_factory=dict)

    def __repr__(self) -> str:
        if not self.slots:
            return "{}"

        pairs = []

        for k, v in self.slots.items():
            pairs.append(f"{k}: {repr(v)}")

        return "{ " + ", ".join(pairs) + " }"

class Family(Enum):
    """Closed variant families known to the harness, with branches in order."""
    BOOLEAN = ("True", "False")
    LIST = ("Empty", "Head")

    @property
    def branches(self) -> Tuple[str, ...]:
        return self.value

@dataclass(frozen=True)
class EygVariant:
    family: Family
    tag: str
    payload: 'EygValue'

    def __post_init__(self) -> None:
        if self.tag not in self.family.branches:
            raise MarshalError(f"'{self.tag}' is not a branch of {self.family.name.lower()}")

    def __repr__(self) -> str:
        if self.family is Family.BOOLEAN:
            return self.tag

        items: List[str] = []
        node: EygVariant = self

        while node.tag == "Head":
            element, node = node.payload.items  # type: ignore[union-attr]
            items.append(repr(element))

        return "list[" + ", ".join(items) + "]"

@dataclass(eq=False)
class EygClosure:
    params: List[Node]        # pattern nodes
    body: Node                # block or expression node
    frame: 'Frame'            # closure frame
    name: Optional[str] = None
    kind: str = "arrow"

    def __repr__(self) -> str:
        label = self.name or "anonymous"
        return f"<{self.kind} {label}/{len(self.params)}>"

IntrinsicFn = Callable[['Frame', List['EygValue']], 'EygValue']

@dataclass(frozen=True, eq=False)
class EygBuiltin:
    name: str
    fn: IntrinsicFn
    arity: Optional[int] = None

    def __repr__(self) -> str:
        return f"<intrinsic {self.name}>"

EygValue: TypeAlias = (
    EygNumber
    | EygString
    | EygArray
    | EygRecord
    | EygVariant
    | EygClosure
    | EygBuiltin
)

_EYG_VALUE_TYPES: Tuple[type, ...] = (
    EygNumber,
    EygString,
    EygArray,
    EygRecord,
    EygVariant,
    EygClosure,
    EygBuiltin,
)

def is_eyg_value(value: Any) -> TypeGuard[EygValue]:
    return isinstance(value, _EYG_VALUE_TYPES)

UNIT = EygArray(())

# ---------- Scope ----------

DebugObserver = Callable[[EygValue], None]

@dataclass
class SandboxContext:
    """Per-run settings every frame can reach through its root."""
    observer: Optional[DebugObserver] = None
    legacy_key_count: bool = False

class Frame:
    def __init__(self, parent: Optional['Frame']=None, source: Optional[str]=None, context: Optional[SandboxContext]=None):
        self.parent = parent
        self.vars: Dict[str, EygValue] = {}
        self._is_function_frame = False
        self.source: Optional[str]
        self.context: SandboxContext

        if source is not None:
            self.source = source
        elif parent is not None:
            self.source = parent.source
        else:
            self.source = None

        if context is not None:
            self.context = context
        elif parent is not None:
            self.context = parent.context
        else:
            self.context = SandboxContext()

    def define(self, name: str, val: EygValue) -> None:
        if name in self.vars:
            raise EygRuntimeError(f"Identifier '{name}' has already been declared")

        self.vars[name] = val

    def get(self, name: str) -> EygValue:
        if name in self.vars:
            return self.vars[name]

        if self.parent is not None:
            return self.parent.get(name)

        raise EygNameError(name)

    def mark_function_frame(self) -> None:
        self._is_function_frame = True

    def is_function_frame(self) -> bool:
        return self._is_function_frame

# ---------- Exceptions ----------

class EygRuntimeError(Exception):
    eyg_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.eyg_meta = None

    def __str__(self) -> str:
        msg = super().__str__()

        meta = getattr(self, "eyg_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class EygTypeError(EygRuntimeError):
    pass

class EygArityError(EygRuntimeError):
    pass

class EygNameError(EygRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"{name} is not defined")
        self.name = name

class EygKeyError(EygRuntimeError):
    def __init__(self, key: str):
        super().__init__(f"Key '{key}' not found")
        self.key = key

class EygIndexError(EygRuntimeError):
    def __init__(self, message: str = "Index out of bounds"):
        super().__init__(message)

class EygThrow(EygRuntimeError):
    """Raised by a `throw` statement in executed code."""
    def __init__(self, value: EygValue):
        super().__init__(f"Uncaught {value!r}")
        self.value = value

class MarshalError(EygRuntimeError):
    """Shape mismatch between host containers or handlers and the encoding."""

class ExecutionError(Exception):
    """Any fault raised while the sandbox evaluated supplied code."""
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

class EygReturnSignal(Exception):
    """Internal control-flow exception used to implement `return`."""
    def __init__(self, value: EygValue):
        self.value = value

# ---------- Results ----------

T = TypeVar("T")
E = TypeVar("E")

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

Result: TypeAlias = Union[Ok[T], Err[E]]

class Intrinsics:
    table: Dict[str, EygBuiltin] = {}
