"""Constructor argument encoding for deployment-sequencer library."""

from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import ABITypeError, EncodingError, ParseError

from .exceptions import ArgumentEncodingError, ConstructorArityError
from .types import Blueprint


def constructor_inputs(abi: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Get the constructor input definitions from an ABI.

    Args:
        abi: Contract ABI

    Returns:
        List of input definitions, empty if the ABI declares no constructor
    """
    for item in abi:
        if item.get("type") == "constructor":
            return list(item.get("inputs", []))
    return []


def abi_type(param: Dict[str, Any]) -> str:
    """
    Get the canonical type string of an ABI parameter.

    Tuples are expanded from their components, e.g. ``(address,uint256)[]``.
    """
    param_type = param["type"]
    if param_type.startswith("tuple"):
        components = ",".join(abi_type(c) for c in param.get("components", []))
        return f"({components}){param_type[len('tuple'):]}"
    return param_type


def constructor_types(abi: List[Dict[str, Any]]) -> List[str]:
    """Get the canonical type strings of the constructor inputs."""
    return [abi_type(param) for param in constructor_inputs(abi)]


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> bytes:
    """
    ABI-encode resolved constructor arguments.

    Args:
        abi: Contract ABI
        args: Resolved constructor arguments (no references left)

    Returns:
        Encoded arguments, empty when the constructor takes none

    Raises:
        ConstructorArityError: If len(args) differs from the constructor inputs
        ArgumentEncodingError: If a value does not fit its declared type
    """
    types = constructor_types(abi)
    if len(types) != len(args):
        raise ConstructorArityError(
            f"Constructor takes {len(types)} arguments, got {len(args)}"
        )

    if not types:
        return b""

    try:
        return encode(types, list(args))
    except (EncodingError, ABITypeError, ParseError) as e:
        raise ArgumentEncodingError(
            f"Cannot encode constructor arguments as ({','.join(types)}): {e}"
        ) from e


def deployment_data(blueprint: Blueprint, args: Sequence[Any]) -> str:
    """
    Build contract creation data: bytecode followed by encoded arguments.

    Args:
        blueprint: Compiled contract template
        args: Resolved constructor arguments

    Returns:
        0x-prefixed hex string
    """
    return blueprint.bytecode + encode_constructor_args(blueprint.abi, args).hex()
