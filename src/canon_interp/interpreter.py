from __future__ import annotations

from enum import Enum
from typing import Callable

from canon_core.config import DEFAULT_INTERPRETER_CONFIG, InterpreterConfig
from canon_core.errors import CanonError, DivisionByZero, ResultTooLarge, Underflow
from canon_core.modes import OpCode
from canon_core.store import CanonicalStore
from canon_interp.instructions import Instruction, InstructionBatch, parse_batch


class BatchState(str, Enum):
    START = "start"
    PARSING = "parsing"
    APPLYING = "applying"
    COMMITTED = "committed"
    FAILED = "failed"


def _op_set(working: int, ins: Instruction) -> int:
    return ins.operand


def _op_add(working: int, ins: Instruction) -> int:
    return working + ins.operand


def _op_subtract(working: int, ins: Instruction) -> int:
    if ins.operand > working:
        raise Underflow(index=ins.index, working=working, operand=ins.operand)
    return working - ins.operand


def _op_multiply(working: int, ins: Instruction) -> int:
    return working * ins.operand


def _op_shift_left(working: int, ins: Instruction) -> int:
    return working << ins.operand


def _op_shift_right(working: int, ins: Instruction) -> int:
    return working >> ins.operand


def _op_divide(working: int, ins: Instruction) -> int:
    if ins.operand == 0:
        raise DivisionByZero(index=ins.index, op=ins.op.value)
    return working // ins.operand


def _op_modulo(working: int, ins: Instruction) -> int:
    if ins.operand == 0:
        raise DivisionByZero(index=ins.index, op=ins.op.value)
    return working % ins.operand


def _op_and(working: int, ins: Instruction) -> int:
    return working & ins.operand


def _op_or(working: int, ins: Instruction) -> int:
    return working | ins.operand


def _op_xor(working: int, ins: Instruction) -> int:
    return working ^ ins.operand


def _op_pow(working: int, ins: Instruction) -> int:
    return working**ins.operand


OP_HANDLERS: dict[OpCode, Callable[[int, Instruction], int]] = {
    OpCode.SET: _op_set,
    OpCode.ADD: _op_add,
    OpCode.SUBTRACT: _op_subtract,
    OpCode.MULTIPLY: _op_multiply,
    OpCode.SHIFT_LEFT: _op_shift_left,
    OpCode.SHIFT_RIGHT: _op_shift_right,
    OpCode.DIVIDE: _op_divide,
    OpCode.MODULO: _op_modulo,
    OpCode.AND: _op_and,
    OpCode.OR: _op_or,
    OpCode.XOR: _op_xor,
    OpCode.POW: _op_pow,
}


def _projected_bits(working: int, ins: Instruction) -> int | None:
    """Lower bound on the result bit length for ops that can explode."""
    if working == 0:
        return None
    if ins.op == OpCode.SHIFT_LEFT:
        return working.bit_length() + ins.operand
    if ins.op == OpCode.POW and working > 1:
        return (working.bit_length() - 1) * ins.operand + 1
    return None


def _check_limit(working: int, ins: Instruction, limit: int | None) -> None:
    if limit is None:
        return
    bits = _projected_bits(working, ins)
    if bits is not None and bits > limit:
        raise ResultTooLarge(index=ins.index, op=ins.op.value, bits=bits, limit=limit)


def apply_instruction(
    working: int,
    ins: Instruction,
    *,
    cfg: InterpreterConfig = DEFAULT_INTERPRETER_CONFIG,
) -> int:
    limit = cfg.max_result_bits
    _check_limit(working, ins, limit)
    result = OP_HANDLERS[ins.op](working, ins)
    if limit is not None and result.bit_length() > limit:
        raise ResultTooLarge(
            index=ins.index, op=ins.op.value, bits=result.bit_length(), limit=limit
        )
    return result


def apply_batch(
    value: int,
    batch: InstructionBatch,
    *,
    cfg: InterpreterConfig = DEFAULT_INTERPRETER_CONFIG,
) -> int:
    """Fold ``batch`` over ``value`` without touching any store."""
    working = value
    for ins in batch:
        working = apply_instruction(working, ins, cfg=cfg)
    return working


class InstructionInterpreter:
    """Runs one batch against a store: Start -> Parsing -> Applying -> Committed | Failed.

    The store is written exactly once, after the last instruction succeeds.
    """

    def __init__(
        self,
        store: CanonicalStore,
        *,
        cfg: InterpreterConfig = DEFAULT_INTERPRETER_CONFIG,
        trace: Callable[[str], None] | None = None,
    ):
        self.store = store
        self.cfg = cfg
        self.trace = trace
        self.state = BatchState.START
        self.position: int | None = None

    def _emit(self, line: str) -> None:
        if self.trace is not None:
            self.trace(line)

    def run(self, source) -> int:
        self.state = BatchState.PARSING
        self.position = None
        try:
            batch = parse_batch(source)
            self._emit(f"   ├─ Parse   : {len(batch)} instruction(s)")
            self.state = BatchState.APPLYING
            working = self.store.get()
            for ins in batch:
                self.position = ins.index
                working = apply_instruction(working, ins, cfg=self.cfg)
        except CanonError as err:
            self.state = BatchState.FAILED
            self._emit(f"   └─ Failed  : {err}")
            raise
        self.store.set(working)
        self.state = BatchState.COMMITTED
        self._emit(f"   └─ Commit  : bit_length={working.bit_length()}")
        return working


def execute_instructions(
    store: CanonicalStore,
    source,
    *,
    cfg: InterpreterConfig = DEFAULT_INTERPRETER_CONFIG,
) -> int:
    return InstructionInterpreter(store, cfg=cfg).run(source)


__all__ = [
    "BatchState",
    "OP_HANDLERS",
    "apply_instruction",
    "apply_batch",
    "InstructionInterpreter",
    "execute_instructions",
]
