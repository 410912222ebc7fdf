"""Data types and dataclasses for deployment-sequencer library."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Reference:
    """Constructor argument standing for the address produced by an earlier step."""

    index: int  # Position of the referenced step in the plan


def ref(index: int) -> Reference:
    """Shorthand for Reference(index)."""
    return Reference(index)


# Literals are passed to the deployer unchanged; lists may nest references
Argument = Union[str, int, bool, bytes, None, Reference, Sequence[Any]]


@dataclass(frozen=True)
class DeploymentStep:
    """One deployment action: a blueprint and its constructor arguments."""

    blueprint: str  # e.g., "HKSToken"
    args: Tuple[Argument, ...] = ()
    label: Optional[str] = None  # Name other steps may reference in plan files

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def references(self) -> Iterator[Reference]:
        """Yield every reference in the argument list, including nested ones."""
        yield from _iter_references(self.args)


def _iter_references(values: Sequence[Any]) -> Iterator[Reference]:
    for value in values:
        if isinstance(value, Reference):
            yield value
        elif isinstance(value, (list, tuple)):
            yield from _iter_references(value)


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of one successful step."""

    index: int  # Position of the step in the plan
    blueprint: str
    address: str  # Opaque on-chain address returned by the deployer


@dataclass(frozen=True)
class DeploymentPlan:
    """Ordered sequence of deployment steps."""

    steps: Tuple[DeploymentStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[DeploymentStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> DeploymentStep:
        return self.steps[index]


@dataclass
class Blueprint:
    """Compiled contract template loaded from an artifact file."""

    name: str  # Contract name, e.g., "MasterChef"
    abi: List[Dict[str, Any]]  # Full contract ABI
    bytecode: str  # Creation bytecode, 0x-prefixed
    source_format: Optional[str] = None  # "truffle", "hardhat" or "foundry"
