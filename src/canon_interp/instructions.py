"""JSON wire format for instruction batches.

Accepted shapes::

    [{"op": "add", "operand": 3}, {"op": "shiftLeft", "operand": "0x10"}]
    {"instructions": [...]}

Operands are non-negative integers, either JSON integers or strings that
``int(s, 0)`` accepts. Decimal literals of any length are converted exactly.
Parsing validates the whole batch before anything is applied, so unknown tags
and bad operands never reach the working value.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import NamedTuple

from canon_core.errors import MalformedInstructions, _format_int
from canon_core.host import _is_host_int
from canon_core.modes import OpCode, coerce_opcode

_INSTRUCTION_KEYS = frozenset(("op", "operand"))

# Below the smallest digit cap sys.set_int_max_str_digits() allows (640).
_DECIMAL_CHUNK_DIGITS = 512
_DECIMAL_LITERAL = re.compile(r"[+-]?[1-9][0-9]*")

# Operands wider than this are dumped as hex strings.
_DUMP_INLINE_BITS = 1024


class Instruction(NamedTuple):
    index: int
    op: OpCode
    operand: int


@dataclass(frozen=True, slots=True)
class InstructionBatch:
    instructions: tuple[Instruction, ...]

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)


def _decimal_to_int(digits: str) -> int:
    """Exact int() for decimal digit strings past the int-string digit cap."""
    if len(digits) <= _DECIMAL_CHUNK_DIGITS:
        return int(digits)
    split = len(digits) // 2
    low_digits = len(digits) - split
    return _decimal_to_int(digits[:split]) * 10**low_digits + _decimal_to_int(
        digits[split:]
    )


def _parse_json_int(literal: str) -> int:
    if literal.startswith("-"):
        return -_decimal_to_int(literal[1:])
    return _decimal_to_int(literal)


def _parse_operand(raw, index: int) -> int:
    if _is_host_int(raw):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            if _DECIMAL_LITERAL.fullmatch(text):
                value = _parse_json_int(text.lstrip("+"))
            else:
                value = int(text, 0)
        except ValueError:
            raise MalformedInstructions(
                reason=f"operand {raw!r} is not an integer literal", index=index
            ) from None
    else:
        raise MalformedInstructions(
            reason=f"operand must be an integer, got {type(raw).__name__}",
            index=index,
        )
    if value < 0:
        raise MalformedInstructions(
            reason=f"operand must be non-negative, got {_format_int(value)}",
            index=index,
        )
    return value


def parse_instruction(entry, index: int) -> Instruction:
    if not isinstance(entry, dict):
        raise MalformedInstructions(
            reason=f"expected an object, got {type(entry).__name__}", index=index
        )
    keys = set(entry)
    missing = _INSTRUCTION_KEYS - keys
    if missing:
        raise MalformedInstructions(
            reason=f"missing key(s): {', '.join(sorted(missing))}", index=index
        )
    extra = keys - _INSTRUCTION_KEYS
    if extra:
        raise MalformedInstructions(
            reason=f"unexpected key(s): {', '.join(sorted(extra))}", index=index
        )
    op = entry["op"]
    if not isinstance(op, str):
        raise MalformedInstructions(
            reason=f"op must be a string, got {type(op).__name__}", index=index
        )
    opcode = coerce_opcode(op, index=index)
    return Instruction(
        index=index, op=opcode, operand=_parse_operand(entry["operand"], index)
    )


def parse_batch(source) -> InstructionBatch:
    """Decode JSON text (or already-decoded data) into an InstructionBatch."""
    if isinstance(source, (str, bytes, bytearray)):
        try:
            data = json.loads(source, parse_int=_parse_json_int)
        except RecursionError:
            raise MalformedInstructions(
                reason="invalid JSON: nesting too deep"
            ) from None
        except ValueError as exc:
            raise MalformedInstructions(reason=f"invalid JSON: {exc}") from None
    else:
        data = source
    if isinstance(data, dict):
        if set(data) != {"instructions"}:
            raise MalformedInstructions(
                reason='top-level object must have exactly the key "instructions"'
            )
        data = data["instructions"]
    if not isinstance(data, list):
        raise MalformedInstructions(
            reason=f"expected a list of instructions, got {type(data).__name__}"
        )
    return InstructionBatch(
        instructions=tuple(
            parse_instruction(entry, index) for index, entry in enumerate(data)
        )
    )


def _dump_operand(operand: int):
    if operand.bit_length() > _DUMP_INLINE_BITS:
        return hex(operand)
    return operand


def dump_batch(batch: InstructionBatch) -> str:
    return json.dumps(
        [{"op": ins.op.value, "operand": _dump_operand(ins.operand)} for ins in batch]
    )


__all__ = [
    "Instruction",
    "InstructionBatch",
    "parse_instruction",
    "parse_batch",
    "dump_batch",
]
