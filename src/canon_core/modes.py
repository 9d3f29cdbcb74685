from __future__ import annotations

from enum import Enum

from canon_core.errors import UnknownOperation, UnknownStrategy


class ReportStrategy(str, Enum):
    BASIC = "basic"
    EXTENDED = "extended"
    FULL = "full"


def coerce_report_strategy(strategy: ReportStrategy | str | None) -> ReportStrategy:
    if isinstance(strategy, ReportStrategy):
        return strategy
    if isinstance(strategy, str):
        for member in ReportStrategy:
            if strategy == member.value:
                return member
    raise UnknownStrategy(
        strategy=strategy,
        allowed=tuple(member.value for member in ReportStrategy),
    )


class OpCode(str, Enum):
    SET = "set"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    SHIFT_LEFT = "shiftLeft"
    SHIFT_RIGHT = "shiftRight"
    DIVIDE = "divide"
    MODULO = "modulo"
    AND = "and"
    OR = "or"
    XOR = "xor"
    POW = "pow"


OP_NAMES = tuple(member.value for member in OpCode)


def coerce_opcode(op: OpCode | str, *, index: int) -> OpCode:
    if isinstance(op, OpCode):
        return op
    for member in OpCode:
        if op == member.value:
            return member
    raise UnknownOperation(index=index, op=op, allowed=OP_NAMES)


__all__ = [
    "ReportStrategy",
    "coerce_report_strategy",
    "OpCode",
    "OP_NAMES",
    "coerce_opcode",
]
